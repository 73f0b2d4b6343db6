import pytest

from abicodec import parse_type, is_dynamic
from abicodec.typesig import ArrayKind, BaseKind, TypeDescriptor
from abicodec.errors import MalformedTypeError, UnsupportedTypeError


@pytest.mark.parametrize(
	'type_str,expected',
	[
		('uint', TypeDescriptor(BaseKind.UINT, bits=256)),
		('uint8', TypeDescriptor(BaseKind.UINT, bits=8)),
		('int', TypeDescriptor(BaseKind.INT, bits=256)),
		('int24', TypeDescriptor(BaseKind.INT, bits=24)),
		('bool', TypeDescriptor(BaseKind.BOOL)),
		('address', TypeDescriptor(BaseKind.ADDRESS)),
		('bytes', TypeDescriptor(BaseKind.BYTES)),
		('bytes1', TypeDescriptor(BaseKind.FIXED_BYTES, size=1)),
		('bytes32', TypeDescriptor(BaseKind.FIXED_BYTES, size=32)),
		('string', TypeDescriptor(BaseKind.STRING)),
		('fixed', TypeDescriptor(BaseKind.FIXED, bits=128, decimals=18)),
		('ufixed', TypeDescriptor(BaseKind.UFIXED, bits=128, decimals=18)),
		('ufixed64x10', TypeDescriptor(BaseKind.UFIXED, bits=64, decimals=10)),
		(
			'address[]',
			TypeDescriptor(BaseKind.ADDRESS, array=ArrayKind.DYNAMIC),
		),
		(
			'string[3]',
			TypeDescriptor(BaseKind.STRING, array=ArrayKind.FIXED, length=3),
		),
		(
			'uint16[2]',
			TypeDescriptor(BaseKind.UINT, bits=16, array=ArrayKind.FIXED, length=2),
		),
	],
)
def test_parse(type_str: str, expected: TypeDescriptor):
	assert parse_type(type_str) == expected


@pytest.mark.parametrize(
	'type_str,canonical',
	[
		('uint', 'uint256'),
		('int', 'int256'),
		('fixed', 'fixed128x18'),
		('ufixed', 'ufixed128x18'),
		('bytes4', 'bytes4'),
		('uint[]', 'uint256[]'),
		('int8[4]', 'int8[4]'),
		('string', 'string'),
	],
)
def test_canonical(type_str: str, canonical: str):
	assert parse_type(type_str).canonical == canonical


def test_element():
	desc = parse_type('bytes8[7]')
	assert desc.is_array
	assert desc.element == parse_type('bytes8')
	assert not desc.element.is_array


@pytest.mark.parametrize(
	'type_str',
	[
		'',
		'foo',
		'Uint256',
		'uint7',
		'uint0',
		'uint264',
		'int257',
		'bytes0',
		'bytes33',
		'bool8',
		'address20',
		'string1',
		'int8x2',
		'fixed128x81',
		'uint256 ',
		' uint256',
		'address[x]',
		'uint[-1]',
		'uint256[0]',
		'uint256[',
		'uint256[²]',
		'uint256[\u0663]',
	],
)
def test_malformed(type_str: str):
	with pytest.raises(MalformedTypeError):
		parse_type(type_str)


@pytest.mark.parametrize(
	'type_str',
	[
		'uint256[][]',
		'uint256[2][]',
		'string[][3]',
		'(uint256,bool)',
		'(address,string)[]',
	],
)
def test_unsupported(type_str: str):
	with pytest.raises(UnsupportedTypeError):
		parse_type(type_str)


def test_unsupported_is_malformed():
	assert issubclass(UnsupportedTypeError, MalformedTypeError)
	assert issubclass(MalformedTypeError, ValueError)


def test_non_string():
	with pytest.raises(MalformedTypeError):
		parse_type(5)  # type: ignore


@pytest.mark.parametrize(
	'type_str,dynamic',
	[
		('uint256', False),
		('int8', False),
		('bool', False),
		('address', False),
		('bytes32', False),
		('fixed', False),
		('bytes', True),
		('string', True),
		('uint256[]', True),
		('bytes32[]', True),
		('string[]', True),
		('address[2]', False),
		('uint8[10]', False),
		# fixed-size arrays are never dynamic, even of dynamic elements
		('string[2]', False),
		('bytes[3]', False),
	],
)
def test_is_dynamic(type_str: str, dynamic: bool):
	desc = parse_type(type_str)
	assert is_dynamic(desc) is dynamic
	assert desc.is_dynamic is dynamic


def test_descriptor_is_immutable():
	desc = parse_type('uint8')
	with pytest.raises(AttributeError):
		desc.bits = 16  # type: ignore


def test_parse_is_cached():
	assert parse_type('uint128[]') is parse_type('uint128[]')
