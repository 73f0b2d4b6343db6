"""
Value types that do not have a python built-in counterpart
"""

__all__ = ('Address',)

import typing
import collections.abc

from eth_utils import to_checksum_address


class Address:
	"""
	Represents 20-byte account address
	"""

	SIZE = 20
	"""
	Constant that represents size of an address in bytes
	"""

	__slots__ = ('_as_bytes', '_as_hex')

	_as_bytes: bytes
	_as_hex: str | None

	def __init__(self, val: 'str | collections.abc.Buffer | Address'):
		"""
		:param val: either a hex encoded address (with or without ``0x``) or buffer of 20 bytes

		.. warning::
			checksum validation is not performed
		"""
		self._as_hex = None
		if isinstance(val, Address):
			self._as_bytes = val._as_bytes
			return
		if isinstance(val, str):
			hex_part = val[2:] if val[:2] in ('0x', '0X') else val
			if len(hex_part) != Address.SIZE * 2:
				raise ValueError(f'invalid address {val!r}')
			try:
				val = bytes.fromhex(hex_part)
			except ValueError as e:
				raise ValueError(f'invalid address {val!r}') from e
		else:
			val = bytes(val)
		if len(val) != Address.SIZE:
			raise ValueError(f'invalid address {val!r}')
		self._as_bytes = val

	@property
	def as_bytes(self) -> bytes:
		"""
		:returns: raw bytes of an address
		"""
		return self._as_bytes

	@property
	def as_hex(self) -> str:
		"""
		:returns: checksum string representation (EIP-55)
		"""
		if self._as_hex is None:
			self._as_hex = to_checksum_address(self._as_bytes)
		return self._as_hex

	@property
	def as_lower_hex(self) -> str:
		return '0x' + self._as_bytes.hex()

	@property
	def as_int(self) -> int:
		"""
		:returns: int representation of an address (unsigned big endian, as it is laid out in a word)
		"""
		return int.from_bytes(self._as_bytes, 'big', signed=False)

	def __hash__(self):
		return hash(self._as_bytes)

	def __lt__(self, r):
		assert isinstance(r, Address)
		return self._as_bytes < r._as_bytes

	def __le__(self, r):
		assert isinstance(r, Address)
		return self._as_bytes <= r._as_bytes

	def __eq__(self, r):
		if not isinstance(r, Address):
			return False
		return self._as_bytes == r._as_bytes

	def __ge__(self, r):
		assert isinstance(r, Address)
		return self._as_bytes >= r._as_bytes

	def __gt__(self, r):
		assert isinstance(r, Address)
		return self._as_bytes > r._as_bytes

	def __repr__(self) -> str:
		return 'Address("' + self.as_hex + '")'

	def __str__(self) -> str:
		return self.as_hex

	def __format__(self, fmt: typing.Literal['x', 'lx', '']) -> str:  # type: ignore
		match fmt:
			case 's':
				return self.__str__()
			case 'x':
				return self.as_hex
			case 'lx':
				return self.as_lower_hex
			case '':
				return repr(self)
			case fmt:
				raise TypeError(f'unsupported format {fmt!r}')
