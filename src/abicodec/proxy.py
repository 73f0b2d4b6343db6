"""
Binding of a :py:class:`~abicodec.contract.ContractInterface` to an address and a transport

Transport is anything that implements :py:class:`Transport`: it frames JSON-RPC requests,
owns connections and subscriptions. The proxy only builds call data and decodes results,
transport failures are propagated as is
"""

__all__ = ('Transport', 'ContractProxy', 'TransactionParams')

import typing
import logging
import collections.abc

from .types import Address
from .errors import MissingAddressError
from .contract import ContractInterface
from .calldata import decode_output, encode_call
from .events import decode_event

logger = logging.getLogger(__name__)


class TransactionParams(typing.TypedDict, total=False):
	"""
	Fields of ``eth_call`` / ``eth_sendTransaction`` parameter object, hex-encoded quantities
	"""

	from_: str
	gas: str
	gasPrice: str
	value: str
	nonce: str


class Transport(typing.Protocol):
	def invoke(self, method: str, params: list[typing.Any]) -> typing.Any: ...

	def subscribe(
		self, method: str, params: list[typing.Any]
	) -> collections.abc.Iterable[typing.Any]: ...


def _tx_object(tx: TransactionParams | None) -> dict[str, typing.Any]:
	res: dict[str, typing.Any] = {}
	if tx is None:
		return res
	for k, v in tx.items():
		# `from` is a keyword
		if k == 'from_':
			k = 'from'
		res[k] = v
	return res


class ContractProxy:
	__slots__ = ('interface', 'address', '_transport')

	def __init__(
		self,
		interface: ContractInterface,
		transport: Transport,
		address: Address | str | None = None,
	):
		self.interface = interface
		self.address = None if address is None else Address(address)
		self._transport = transport

	def _target(self) -> str:
		if self.address is None:
			raise MissingAddressError('contract address is not set, deploy it or pass `address`')
		return self.address.as_hex

	def call(
		self,
		name: str,
		index: int,
		*args: typing.Any,
		tx: TransactionParams | None = None,
		block: str = 'latest',
	) -> typing.Any:
		"""
		Executes ``eth_call`` and decodes declared outputs

		:returns: :py:obj:`None` for no outputs, the value for a single output, :py:class:`tuple` otherwise
		"""
		member = self.interface.function(name, index)
		params = _tx_object(tx)
		params['to'] = self._target()
		params['data'] = encode_call(member, args).to_hex()
		logger.debug('eth_call %s on %s', member.signature, params['to'])
		result = self._transport.invoke('eth_call', [params, block])
		decoded = decode_output(member, result)
		match len(decoded):
			case 0:
				return None
			case 1:
				return decoded[0]
			case _:
				return tuple(decoded)

	def send(
		self,
		name: str,
		index: int,
		*args: typing.Any,
		tx: TransactionParams | None = None,
	) -> str:
		"""
		:returns: transaction hash reported by the transport
		"""
		member = self.interface.function(name, index)
		params = _tx_object(tx)
		params['to'] = self._target()
		params['data'] = encode_call(member, args).to_hex()
		logger.debug('eth_sendTransaction %s on %s', member.signature, params['to'])
		return self._transport.invoke('eth_sendTransaction', [params])

	def deploy(
		self,
		bytecode: 'str | collections.abc.Buffer',
		*args: typing.Any,
		tx: TransactionParams | None = None,
	) -> str:
		"""
		Sends creation transaction, receipt polling is up to the caller

		:returns: transaction hash reported by the transport
		"""
		params = _tx_object(tx)
		params['data'] = self.interface.encode_deploy(bytecode, args)
		logger.debug('eth_sendTransaction deploy, %d constructor arguments', len(args))
		return self._transport.invoke('eth_sendTransaction', [params])

	def events(
		self, name: str, index: int
	) -> collections.abc.Generator[dict[str, typing.Any], None, None]:
		"""
		Subscribes to logs of an event and yields decoded fields of each pushed payload

		Payload is either a log object (with ``data`` and ``topics``) or bare hex data
		"""
		member = self.interface.event(name, index)
		log_filter: dict[str, typing.Any] = {'address': self._target()}
		if (topic := member.topic) is not None:
			log_filter['topics'] = ['0x' + topic.hex()]
		logger.debug('eth_subscribe logs for %s', member.signature)
		for payload in self._transport.subscribe('eth_subscribe', ['logs', log_filter]):
			if isinstance(payload, collections.abc.Mapping):
				yield decode_event(member, payload.get('data', '0x'), payload.get('topics', ()))
			else:
				yield decode_event(member, payload)

	def __repr__(self) -> str:
		return f'ContractProxy({self.address!r}, {self.interface!r})'
