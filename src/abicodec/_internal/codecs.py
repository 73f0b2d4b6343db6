import abc
import typing
import decimal
import collections.abc

from dataclasses import dataclass

from ..types import Address
from ..errors import ArityError, DecodeError, RangeError, ValueTypeError
from . import reflect

T = typing.TypeVar('T')

WORD = 32

_ZERO_WORD = b'\x00' * WORD


def word(val: int) -> bytes:
	return val.to_bytes(WORD, 'big', signed=False)


def pad_right(data: bytes) -> bytes:
	return data + b'\x00' * ((WORD - len(data) % WORD) % WORD)


@dataclass
class EncodeState:
	"""
	One head/tail region under construction

	``offset`` is where the next tail payload lands, relative to the start of the region.
	Every region owns its own state, nested regions get a fresh one
	"""

	head: bytearray
	tail: bytearray
	offset: int

	def put_static(self, data: bytes) -> None:
		self.head.extend(data)

	def put_dynamic(self, payload: bytes) -> int:
		at = self.offset
		self.head.extend(word(at))
		self.tail.extend(payload)
		self.offset += len(payload)
		return at

	def result(self) -> bytes:
		return bytes(self.head + self.tail)


@dataclass
class DecoderState:
	mem: memoryview
	current_off: int
	current_off_0: int

	def fetch_head(self, le: int) -> memoryview:
		end = self.current_off + le
		if end > len(self.mem):
			raise DecodeError(
				f'unexpected end of data: need {le} bytes at {self.current_off}, have {len(self.mem) - self.current_off}'
			)
		res = self.mem[self.current_off : end]
		self.current_off = end
		return res

	def fetch_padded(self, le: int) -> memoryview:
		"""
		reads ``le`` bytes and skips zero padding up to the next word boundary
		"""
		res = self.fetch_head(le)
		self.fetch_head((WORD - le % WORD) % WORD)
		return res

	def fetch_word(self) -> int:
		return int.from_bytes(self.fetch_head(WORD), 'big', signed=False)

	@property
	def remaining(self) -> int:
		return len(self.mem) - self.current_off

	def indirected(self) -> 'DecoderState':
		off = self.fetch_word()

		new_off_0 = self.current_off_0 + off
		if new_off_0 > len(self.mem):
			raise DecodeError(f'offset {off} points outside of data')
		return DecoderState(
			current_off_0=new_off_0,
			current_off=new_off_0,
			mem=self.mem,
		)

	def derived(self) -> 'DecoderState':
		return DecoderState(
			current_off_0=self.current_off,
			current_off=self.current_off,
			mem=self.mem,
		)


class Codec(typing.Generic[T], metaclass=abc.ABCMeta):
	@property
	@abc.abstractmethod
	def is_dynamic(self) -> bool: ...

	@property
	@abc.abstractmethod
	def name(self) -> str: ...

	@abc.abstractmethod
	def encode(self, val: T) -> bytes:
		"""
		:returns: encoding of the value itself: the head word(s) for static types, the tail payload for dynamic ones
		"""
		...

	@abc.abstractmethod
	def decode_here(self, state: DecoderState) -> T:
		"""
		reads value that is laid out at the current position (without following an offset)
		"""
		...

	def decode(self, state: DecoderState) -> T:
		if self.is_dynamic:
			state = state.indirected()
		return self.decode_here(state)

	def __repr__(self):
		return self.name


def layout(codecs: collections.abc.Sequence[Codec], vals: collections.abc.Sequence) -> EncodeState:
	"""
	Lays out values one after another: static ones in head, dynamic ones as head offset plus tail payload
	"""
	encoded: list[bytes] = []
	for i, (c, v) in enumerate(zip(codecs, vals)):
		with reflect.context_notes(f'at element #{i} of type `{c.name}`'):
			encoded.append(c.encode(v))

	head_size = sum(WORD if c.is_dynamic else len(e) for c, e in zip(codecs, encoded))
	state = EncodeState(bytearray(), bytearray(), head_size)
	for c, e in zip(codecs, encoded):
		if c.is_dynamic:
			state.put_dynamic(e)
		else:
			state.put_static(e)
	return state


def _check_int(val: typing.Any) -> int:
	if isinstance(val, bool) or not isinstance(val, int):
		raise ValueTypeError(f'expected int, got {reflect.repr_value(val)}')
	return val


def _check_sequence(val: typing.Any) -> collections.abc.Sequence:
	if isinstance(val, (str, bytes, bytearray)) or not isinstance(
		val, collections.abc.Sequence
	):
		raise ValueTypeError(f'expected sequence, got {reflect.repr_value(val)}')
	return val


def _check_buffer(val: typing.Any) -> bytes:
	if not isinstance(val, (bytes, bytearray, memoryview)):
		raise ValueTypeError(f'expected bytes, got {reflect.repr_value(val)}')
	return bytes(val)


class IntCodec(Codec[int]):
	@property
	def is_dynamic(self) -> bool:
		return False

	@property
	def name(self) -> str:
		return self._name

	def __init__(self, bits: int, signed: bool):
		if signed:
			self._name = f'int{bits}'
			self.min = -(1 << (bits - 1))
			self.max = (1 << (bits - 1)) - 1
		else:
			self._name = f'uint{bits}'
			self.min = 0
			self.max = (1 << bits) - 1
		self.bits = bits
		self.signed = signed

	def check_range(self, val: int) -> None:
		if not self.signed and val < 0:
			raise RangeError(f'negative value {val} for unsigned `{self._name}`')
		if val < self.min or val > self.max:
			raise RangeError(
				f'value {val} does not fit into `{self._name}` ({val.bit_length()} bits)'
			)

	def encode(self, val: int) -> bytes:
		val = _check_int(val)
		self.check_range(val)
		return val.to_bytes(WORD, 'big', signed=self.signed)

	def decode_here(self, state: DecoderState) -> int:
		return int.from_bytes(state.fetch_head(WORD), 'big', signed=self.signed)


class BoolCodec(Codec[bool]):
	@property
	def is_dynamic(self) -> bool:
		return False

	@property
	def name(self) -> str:
		return 'bool'

	def encode(self, val: bool) -> bytes:
		if not isinstance(val, bool):
			raise ValueTypeError(f'expected bool, got {reflect.repr_value(val)}')
		return word(1 if val else 0)

	def decode_here(self, state: DecoderState) -> bool:
		return state.fetch_head(WORD) != _ZERO_WORD


class AddressCodec(Codec[Address]):
	@property
	def is_dynamic(self) -> bool:
		return False

	@property
	def name(self) -> str:
		return 'address'

	def encode(self, val: Address | str | bytes) -> bytes:
		try:
			addr = Address(val)
		except (ValueError, TypeError) as e:
			raise ValueTypeError(f'expected address, got {reflect.repr_value(val)}') from e
		return b'\x00' * 12 + addr.as_bytes

	def decode_here(self, state: DecoderState) -> Address:
		state.fetch_head(12)
		return Address(state.fetch_head(20))


class FixedBytesCodec(Codec[bytes]):
	def __init__(self, size: int):
		self.size = size

	@property
	def is_dynamic(self) -> bool:
		return False

	@property
	def name(self) -> str:
		return f'bytes{self.size}'

	def encode(self, val: bytes) -> bytes:
		val = _check_buffer(val)
		if len(val) > self.size:
			raise RangeError(f'{len(val)} bytes do not fit into `{self.name}`')
		return val + b'\x00' * (WORD - len(val))

	def decode_here(self, state: DecoderState) -> bytes:
		res = bytes(state.fetch_head(self.size))
		state.fetch_head(WORD - self.size)
		return res


class BytesCodec(Codec[bytes]):
	@property
	def is_dynamic(self) -> bool:
		return True

	@property
	def name(self) -> str:
		return 'bytes'

	def encode(self, val: bytes) -> bytes:
		val = _check_buffer(val)
		return word(len(val)) + pad_right(val)

	def decode_here(self, state: DecoderState) -> bytes:
		le = state.fetch_word()
		return bytes(state.fetch_padded(le))


class StringCodec(Codec[str]):
	@property
	def is_dynamic(self) -> bool:
		return True

	@property
	def name(self) -> str:
		return 'string'

	def encode(self, val: str) -> bytes:
		if not isinstance(val, str):
			raise ValueTypeError(f'expected str, got {reflect.repr_value(val)}')
		as_bytes = val.encode('utf-8')
		return word(len(as_bytes)) + pad_right(as_bytes)

	def decode_here(self, state: DecoderState) -> str:
		le = state.fetch_word()
		as_bytes = state.fetch_padded(le)
		try:
			res = str(as_bytes, 'utf-8')
		except UnicodeDecodeError as e:
			raise DecodeError('string payload is not valid utf-8') from e
		return res.rstrip('\x00')


class FixedPointCodec(Codec[decimal.Decimal]):
	# fixed256x80 needs 78 + 80 significant digits
	PRECISION = 200

	def __init__(self, bits: int, decimals: int, signed: bool):
		self.decimals = decimals
		self.signed = signed
		self._int = IntCodec(bits, signed)
		prefix = 'fixed' if signed else 'ufixed'
		self._name = f'{prefix}{bits}x{decimals}'

	@property
	def is_dynamic(self) -> bool:
		return False

	@property
	def name(self) -> str:
		return self._name

	def encode(self, val: decimal.Decimal | int) -> bytes:
		if isinstance(val, bool) or not isinstance(val, (int, decimal.Decimal)):
			raise ValueTypeError(
				f'expected Decimal or int, got {reflect.repr_value(val)}'
			)
		with decimal.localcontext() as ctx:
			ctx.prec = self.PRECISION
			as_dec = decimal.Decimal(val)
			if not as_dec.is_finite():
				raise RangeError(f'non-finite value {val} for `{self._name}`')
			scaled = as_dec.scaleb(self.decimals)
			if scaled != scaled.to_integral_value():
				raise RangeError(
					f'value {val} has more than {self.decimals} decimals for `{self._name}`'
				)
			as_int = int(scaled)
		try:
			self._int.check_range(as_int)
		except RangeError as e:
			e.add_note(f'while encoding `{self._name}` value {val}')
			raise
		return as_int.to_bytes(WORD, 'big', signed=self.signed)

	def decode_here(self, state: DecoderState) -> decimal.Decimal:
		as_int = self._int.decode_here(state)
		with decimal.localcontext() as ctx:
			ctx.prec = self.PRECISION
			return decimal.Decimal(as_int).scaleb(-self.decimals)


class ArrayCodec(Codec[list[T]]):
	"""
	``T[N]``: elements are placed one after another in the current region,
	even if ``T`` is dynamic
	"""

	def __init__(self, elem_codec: Codec[T], elem_count: int):
		self.elem_codec = elem_codec
		self.elem_count = elem_count

	@property
	def is_dynamic(self) -> bool:
		return False

	@property
	def name(self) -> str:
		return self.elem_codec.name + f'[{self.elem_count}]'

	def encode(self, val: collections.abc.Sequence[T]) -> bytes:
		val = _check_sequence(val)
		if len(val) != self.elem_count:
			raise ArityError(
				f'`{self.name}` expects {self.elem_count} elements, got {len(val)}'
			)
		res = bytearray()
		for i, v in enumerate(val):
			with reflect.context_notes(f'at element #{i} of `{self.name}`'):
				res.extend(self.elem_codec.encode(v))
		return bytes(res)

	def decode_here(self, state: DecoderState) -> list[T]:
		res = []
		for i in range(self.elem_count):
			res.append(self.elem_codec.decode_here(state))
		return res


class DynArrayCodec(Codec[list[T]]):
	def __init__(self, elem_codec: Codec[T]):
		self.elem_codec = elem_codec

	@property
	def is_dynamic(self) -> bool:
		return True

	@property
	def name(self) -> str:
		return self.elem_codec.name + '[]'

	def encode(self, val: collections.abc.Sequence[T]) -> bytes:
		val = _check_sequence(val)
		elems = layout([self.elem_codec] * len(val), val)
		return word(len(val)) + elems.result()

	def decode_here(self, state: DecoderState) -> list[T]:
		le = state.fetch_word()
		if le * WORD > state.remaining:
			raise DecodeError(
				f'`{self.name}` declares {le} elements, data holds at most {state.remaining // WORD}'
			)
		state = state.derived()
		res = []
		for i in range(le):
			res.append(self.elem_codec.decode(state))
		return res


class TupleCodec(Codec[tuple]):
	"""
	In-place tuple, used for argument and return lists
	"""

	def __init__(self, elem_codecs: tuple[Codec, ...]):
		self.elem_codecs = elem_codecs
		self._name = '(' + ','.join(e.name for e in elem_codecs) + ')'

	@property
	def is_dynamic(self) -> bool:
		return False

	@property
	def name(self) -> str:
		return self._name

	def encode_regions(self, val: collections.abc.Sequence) -> EncodeState:
		val = _check_sequence(val)
		if len(val) != len(self.elem_codecs):
			raise ArityError(f'expected {len(self.elem_codecs)} values, got {len(val)}')
		return layout(self.elem_codecs, val)

	def encode(self, val: collections.abc.Sequence) -> bytes:
		return self.encode_regions(val).result()

	def decode_here(self, state: DecoderState) -> tuple:
		state = state.derived()
		res = []
		for i, enc in enumerate(self.elem_codecs):
			with reflect.context_notes(f'at element #{i} of type `{enc.name}`'):
				res.append(enc.decode(state))
		return tuple(res)
