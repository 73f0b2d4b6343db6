import decimal

import eth_abi.abi as eth
import pytest

import abicodec

from .common import *


@pytest.mark.parametrize(
	'types,vals',
	[
		(['uint256'], [10]),
		(['uint8', 'int32'], [255, -(2**31)]),
		(['bool', 'bool'], [True, False]),
		(['bytes3'], [b'123']),
		(['bytes32'], [b'\x01' * 32]),
		(['address'], [ADDR_B]),
		(['string'], ['']),
		(['string'], ['руские буквы' * 5]),
		(['bytes'], [b'second' * 29]),
		(['uint256', 'string'], [10, 'hi']),
		(['string', 'uint32', 'bytes'], ['first' * 29, 18, b'second' * 29]),
		(['uint256[]'], [[1, 2, 3]]),
		(['string[]'], [['a', 'bc' * 40, '']]),
		(['bytes[]', 'address[]'], [[b'', b'x' * 33], [ADDR_A, ADDR_B]]),
		(['uint8[3]', 'string'], [[1, 2, 3], 'tail']),
		(['address[2]'], [[ADDR_A, ADDR_B]]),
		(['ufixed128x18'], [decimal.Decimal('1.5')]),
		(['fixed128x18'], [decimal.Decimal('-2.25')]),
	],
)
def test_same_as_eth_abi(types: list[str], vals: list):
	assert abicodec.encode(types, vals) == eth.encode(types, vals)


@pytest.mark.parametrize(
	'types,vals',
	[
		(['uint256', 'string'], [10, 'hi']),
		(['int16[]', 'bytes'], [[-1, 300], b'\x00' * 40]),
		(['string[]', 'bool'], [['x', 'yy' * 50], True]),
	],
)
def test_decodes_eth_abi(types: list[str], vals: list):
	assert abicodec.decode(types, eth.encode(types, vals)) == vals
