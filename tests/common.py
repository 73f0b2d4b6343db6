import random

from eth_utils import keccak


def word(val: int) -> bytes:
	return val.to_bytes(32, 'big', signed=val < 0)


def padded(data: bytes) -> bytes:
	return data + b'\x00' * ((32 - len(data) % 32) % 32)


def selector(sig: str) -> bytes:
	return keccak(text=sig)[:4]


ADDR_A = '0x' + 'aa' * 20
ADDR_B = '0x5b38da6a701c568545dcfcb03fcb875f56beddc4'


TOKEN_ABI = [
	{
		'type': 'constructor',
		'inputs': [
			{'name': 'initialSupply', 'type': 'uint256'},
			{'name': 'tokenName', 'type': 'string'},
		],
		'stateMutability': 'nonpayable',
	},
	{
		'type': 'function',
		'name': 'name',
		'inputs': [],
		'outputs': [{'name': '', 'type': 'string'}],
		'stateMutability': 'view',
	},
	{
		'type': 'function',
		'name': 'balanceOf',
		'inputs': [{'name': 'owner', 'type': 'address'}],
		'outputs': [{'name': '', 'type': 'uint256'}],
		'stateMutability': 'view',
	},
	{
		'type': 'function',
		'name': 'transfer',
		'inputs': [
			{'name': 'to', 'type': 'address'},
			{'name': 'value', 'type': 'uint256'},
		],
		'outputs': [{'name': '', 'type': 'bool'}],
		'stateMutability': 'nonpayable',
	},
	{
		'type': 'function',
		'name': 'mint',
		'inputs': [
			{'name': 'to', 'type': 'address'},
			{'name': 'amount', 'type': 'uint256'},
		],
		'outputs': [],
		'stateMutability': 'nonpayable',
	},
	{
		'type': 'function',
		'name': 'mint',
		'inputs': [{'name': 'to', 'type': 'address'}],
		'outputs': [],
		'stateMutability': 'nonpayable',
	},
	{
		'type': 'function',
		'name': 'info',
		'inputs': [],
		'outputs': [
			{'name': 'supply', 'type': 'uint256'},
			{'name': 'symbol', 'type': 'string'},
			{'name': 'owner', 'type': 'address'},
		],
		'constant': True,
	},
	{
		'type': 'event',
		'name': 'Transfer',
		'inputs': [
			{'name': 'from', 'type': 'address', 'indexed': True},
			{'name': 'to', 'type': 'address', 'indexed': True},
			{'name': 'value', 'type': 'uint256', 'indexed': False},
		],
		'anonymous': False,
	},
	{
		'type': 'event',
		'name': 'Memo',
		'inputs': [
			{'name': 'text', 'type': 'string', 'indexed': True},
			{'name': 'body', 'type': 'string', 'indexed': False},
		],
		'anonymous': False,
	},
	{'type': 'fallback', 'stateMutability': 'payable'},
]


def byte_range(first, last):
	return list(range(first, last + 1))


first_values = byte_range(0x00, 0x7F) + byte_range(0xC2, 0xF4)
trailing_values = byte_range(0x80, 0xBF)


def random_utf8_codepoint(rnd: random.Random) -> bytes:
	first = rnd.choice(first_values)
	if first <= 0x7F:
		return bytes([first])
	elif first <= 0xDF:
		return bytes([first, rnd.choice(trailing_values)])
	elif first == 0xE0:
		return bytes(
			[first, rnd.choice(byte_range(0xA0, 0xBF)), rnd.choice(trailing_values)]
		)
	elif first == 0xED:
		return bytes(
			[first, rnd.choice(byte_range(0x80, 0x9F)), rnd.choice(trailing_values)]
		)
	elif first <= 0xEF:
		return bytes([first, rnd.choice(trailing_values), rnd.choice(trailing_values)])
	elif first == 0xF0:
		return bytes(
			[
				first,
				rnd.choice(byte_range(0x90, 0xBF)),
				rnd.choice(trailing_values),
				rnd.choice(trailing_values),
			]
		)
	elif first <= 0xF3:
		return bytes(
			[
				first,
				rnd.choice(trailing_values),
				rnd.choice(trailing_values),
				rnd.choice(trailing_values),
			]
		)
	elif first == 0xF4:
		return bytes(
			[
				first,
				rnd.choice(byte_range(0x80, 0x8F)),
				rnd.choice(trailing_values),
				rnd.choice(trailing_values),
			]
		)
	raise Exception('unreachable')


def random_str(size, rnd: random.Random):
	mem = bytearray()
	for x in range(size):
		mem.extend(random_utf8_codepoint(rnd))
	return str(mem, encoding='utf-8')
