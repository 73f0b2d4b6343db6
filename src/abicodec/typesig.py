"""
Parsing of solidity type strings into :py:class:`TypeDescriptor`

Supported grammar::

	baseName [digits] ['x' digits] ['[' [digits] ']']

where ``baseName`` is one of ``int``, ``uint``, ``bool``, ``address``, ``bytes``,
``string``, ``fixed``, ``ufixed``

.. warning::
	fixed-size arrays are always classified as static, even when their element is dynamic
	(``string[2]``). Nested arrays and tuples are rejected with :py:class:`~abicodec.errors.UnsupportedTypeError`
"""

__all__ = (
	'BaseKind',
	'ArrayKind',
	'TypeDescriptor',
	'parse',
	'is_dynamic',
	'DEFAULT_INT_BITS',
	'DEFAULT_FIXED_BITS',
	'DEFAULT_FIXED_DECIMALS',
)

import re
import enum
import functools
import dataclasses

from .errors import MalformedTypeError, UnsupportedTypeError

DEFAULT_INT_BITS = 256
DEFAULT_FIXED_BITS = 128
DEFAULT_FIXED_DECIMALS = 18

MAX_FIXED_DECIMALS = 80


class BaseKind(enum.Enum):
	INT = 'int'
	UINT = 'uint'
	BOOL = 'bool'
	ADDRESS = 'address'
	FIXED_BYTES = 'bytesN'
	BYTES = 'bytes'
	STRING = 'string'
	FIXED = 'fixed'
	UFIXED = 'ufixed'


class ArrayKind(enum.Enum):
	NONE = 'none'
	FIXED = 'fixed'
	DYNAMIC = 'dynamic'


@dataclasses.dataclass(frozen=True, slots=True)
class TypeDescriptor:
	kind: BaseKind
	bits: int | None = None
	"""
	bit width of ``int``/``uint``/``fixed``/``ufixed`` family
	"""
	size: int | None = None
	"""
	byte width of ``bytesN``
	"""
	decimals: int | None = None
	"""
	``N`` of ``fixedMxN``
	"""
	array: ArrayKind = ArrayKind.NONE
	length: int | None = None
	"""
	element count of a fixed-size array
	"""

	def __post_init__(self):
		if self.bits is not None and (
			self.bits <= 0 or self.bits > 256 or self.bits % 8 != 0
		):
			raise MalformedTypeError(f'invalid bit width {self.bits}')
		if self.size is not None and not 1 <= self.size <= 32:
			raise MalformedTypeError(f'invalid byte width {self.size}')
		if self.decimals is not None and not 0 <= self.decimals <= MAX_FIXED_DECIMALS:
			raise MalformedTypeError(f'invalid decimals count {self.decimals}')
		if (self.array is ArrayKind.FIXED) != (self.length is not None):
			raise MalformedTypeError('array length must be set for fixed arrays only')
		if self.length is not None and self.length <= 0:
			raise MalformedTypeError('array size must be strictly positive')

	@property
	def element(self) -> 'TypeDescriptor':
		"""
		:returns: descriptor of array element (``self`` for non-arrays)
		"""
		if self.array is ArrayKind.NONE:
			return self
		return dataclasses.replace(self, array=ArrayKind.NONE, length=None)

	@property
	def is_array(self) -> bool:
		return self.array is not ArrayKind.NONE

	@property
	def is_dynamic(self) -> bool:
		return is_dynamic(self)

	@property
	def canonical(self) -> str:
		"""
		normalized type name, ``uint`` becomes ``uint256``
		"""
		match self.kind:
			case BaseKind.INT | BaseKind.UINT:
				res = f'{self.kind.value}{self.bits}'
			case BaseKind.FIXED | BaseKind.UFIXED:
				res = f'{self.kind.value}{self.bits}x{self.decimals}'
			case BaseKind.FIXED_BYTES:
				res = f'bytes{self.size}'
			case kind:
				res = kind.value
		match self.array:
			case ArrayKind.FIXED:
				res += f'[{self.length}]'
			case ArrayKind.DYNAMIC:
				res += '[]'
		return res

	def __str__(self) -> str:
		return self.canonical


def is_dynamic(desc: TypeDescriptor) -> bool:
	"""
	Decides whether value of this type is placed as offset into the tail

	Dynamic are exactly ``string``, ``bytes`` and ``T[]``. ``T[N]`` is static for every ``T``
	"""
	match desc.array:
		case ArrayKind.DYNAMIC:
			return True
		case ArrayKind.FIXED:
			return False
	return desc.kind in (BaseKind.STRING, BaseKind.BYTES)


_TYPE_RE = re.compile(
	r'(?P<base>[a-z]+)(?P<bits>[0-9]+)?(?:x(?P<decimals>[0-9]+))?(?P<dims>(?:\[[^\[\]]*\])*)'
)


def _parse_dims(type_str: str, dims: str) -> tuple[ArrayKind, int | None]:
	if dims == '':
		return ArrayKind.NONE, None
	parts = dims[1:-1].split('][')
	if len(parts) > 1:
		raise UnsupportedTypeError(
			f'multi-dimensional arrays are not supported: `{type_str}`'
		)
	size = parts[0]
	if size == '':
		return ArrayKind.DYNAMIC, None
	if not (size.isascii() and size.isdigit()):
		raise MalformedTypeError(f'non-numeric array size `{size}` in `{type_str}`')
	return ArrayKind.FIXED, int(size)


@functools.lru_cache(maxsize=1024)
def parse(type_str: str) -> TypeDescriptor:
	"""
	:param type_str: type as it is written in interface document, for instance ``uint256``, ``bytes32``, ``address[]``, ``string[3]``
	:returns: immutable descriptor
	:raises MalformedTypeError: for unknown base names and bad sizes
	:raises UnsupportedTypeError: for tuples and nested arrays
	"""
	if not isinstance(type_str, str):
		raise MalformedTypeError(f'type must be a string, got {type_str!r}')
	if type_str.startswith('('):
		raise UnsupportedTypeError(f'tuple types are not supported: `{type_str}`')
	match = _TYPE_RE.fullmatch(type_str)
	if match is None:
		raise MalformedTypeError(f'malformed type `{type_str}`')

	base = match['base']
	bits_str = match['bits']
	decimals_str = match['decimals']
	array, length = _parse_dims(type_str, match['dims'])

	bits = int(bits_str) if bits_str is not None else None
	if decimals_str is not None and base not in ('fixed', 'ufixed'):
		raise MalformedTypeError(f'only fixed point types have decimals: `{type_str}`')

	try:
		match base:
			case 'int' | 'uint':
				return TypeDescriptor(
					BaseKind(base),
					bits=DEFAULT_INT_BITS if bits is None else bits,
					array=array,
					length=length,
				)
			case 'fixed' | 'ufixed':
				if bits is None and decimals_str is not None:
					raise MalformedTypeError(f'decimals without width: `{type_str}`')
				if bits is None:
					bits = DEFAULT_FIXED_BITS
					decimals = DEFAULT_FIXED_DECIMALS
				elif decimals_str is None:
					decimals = DEFAULT_FIXED_DECIMALS
				else:
					decimals = int(decimals_str)
				return TypeDescriptor(
					BaseKind(base), bits=bits, decimals=decimals, array=array, length=length
				)
			case 'bytes':
				if bits is None:
					return TypeDescriptor(BaseKind.BYTES, array=array, length=length)
				return TypeDescriptor(
					BaseKind.FIXED_BYTES, size=bits, array=array, length=length
				)
			case 'bool' | 'address' | 'string':
				if bits is not None:
					raise MalformedTypeError(f'`{base}` does not take a width: `{type_str}`')
				return TypeDescriptor(BaseKind(base), array=array, length=length)
			case _:
				raise MalformedTypeError(f'unknown base type `{base}` in `{type_str}`')
	except MalformedTypeError as e:
		e.add_note(f'while parsing type `{type_str}`')
		raise
