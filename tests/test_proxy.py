import pytest

from abicodec import Address, ContractInterface, ContractProxy
from abicodec.errors import MissingAddressError

from .common import *


class FakeTransport:
	def __init__(self, results=(), pushes=()):
		self.results = list(results)
		self.pushes = list(pushes)
		self.calls: list[tuple[str, list]] = []

	def invoke(self, method, params):
		self.calls.append((method, params))
		res = self.results.pop(0)
		if isinstance(res, Exception):
			raise res
		return res

	def subscribe(self, method, params):
		self.calls.append((method, params))
		yield from self.pushes


@pytest.fixture
def iface() -> ContractInterface:
	return ContractInterface(TOKEN_ABI)


def test_call(iface: ContractInterface):
	transport = FakeTransport(['0x' + word(42).hex()])
	proxy = ContractProxy(iface, transport, ADDR_A)
	assert proxy.call('balanceOf', 0, ADDR_B) == 42
	method, params = transport.calls[0]
	assert method == 'eth_call'
	assert params[0] == {
		'to': Address(ADDR_A).as_hex,
		'data': iface.encode_call('balanceOf', 0, [ADDR_B]).to_hex(),
	}
	assert params[1] == 'latest'


def test_call_many_outputs(iface: ContractInterface):
	data = word(1) + word(96) + word(int(ADDR_B, 16)) + word(3) + padded(b'TOK')
	transport = FakeTransport([data.hex()])
	proxy = ContractProxy(iface, transport, ADDR_A)
	assert proxy.call('info', 0, block='0x10') == (1, 'TOK', Address(ADDR_B))
	assert transport.calls[0][1][1] == '0x10'


def test_call_no_outputs(iface: ContractInterface):
	transport = FakeTransport(['0x'])
	proxy = ContractProxy(iface, transport, ADDR_A)
	assert proxy.call('mint', 1, ADDR_B) is None


def test_call_without_address(iface: ContractInterface):
	proxy = ContractProxy(iface, FakeTransport())
	with pytest.raises(MissingAddressError):
		proxy.call('name', 0)
	with pytest.raises(MissingAddressError):
		list(proxy.events('Transfer', 0))


def test_send(iface: ContractInterface):
	transport = FakeTransport(['0xhash'])
	proxy = ContractProxy(iface, transport, ADDR_A)
	res = proxy.send('transfer', 0, ADDR_B, 5, tx={'from_': ADDR_B, 'gas': '0x5208'})
	assert res == '0xhash'
	method, params = transport.calls[0]
	assert method == 'eth_sendTransaction'
	assert params[0]['from'] == ADDR_B
	assert params[0]['gas'] == '0x5208'
	assert params[0]['data'].startswith('0xa9059cbb')


def test_deploy(iface: ContractInterface):
	transport = FakeTransport(['0xhash'])
	proxy = ContractProxy(iface, transport)
	assert proxy.deploy('0x6080', 100, 'Tok') == '0xhash'
	method, params = transport.calls[0]
	assert method == 'eth_sendTransaction'
	assert params[0] == {'data': iface.encode_deploy('0x6080', [100, 'Tok'])}


def test_transport_errors_propagate(iface: ContractInterface):
	transport = FakeTransport([ConnectionError('down')])
	proxy = ContractProxy(iface, transport, ADDR_A)
	with pytest.raises(ConnectionError):
		proxy.call('name', 0)


def test_events(iface: ContractInterface):
	ev = iface.event('Transfer', 0)
	topic = '0x' + ev.topic.hex()  # type: ignore
	pushes = [
		{
			'data': '0x' + word(1).hex(),
			'topics': [topic, '0x' + word(int(ADDR_A, 16)).hex(), '0x' + word(int(ADDR_B, 16)).hex()],
		},
		'0x' + word(2).hex(),
	]
	transport = FakeTransport(pushes=pushes)
	proxy = ContractProxy(iface, transport, ADDR_A)
	got = list(proxy.events('Transfer', 0))
	assert got == [
		{'from': Address(ADDR_A), 'to': Address(ADDR_B), 'value': 1},
		{'value': 2},
	]
	method, params = transport.calls[0]
	assert method == 'eth_subscribe'
	assert params == ['logs', {'address': Address(ADDR_A).as_hex, 'topics': [topic]}]
