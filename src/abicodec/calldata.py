"""
This module is responsible for building call data of a single invocation and decoding returned data

Call data consists of selector (first 4 bytes of keccak256 of the canonical signature),
head (one slot per static value or offset) and tail (payloads of dynamic values)::

	0x <selector> <head> <tail>
"""

__all__ = (
	'CallData',
	'MethodEncoder',
	'signature_of',
	'selector_of',
	'event_topic_of',
	'encode',
	'decode',
	'encode_call',
	'encode_deploy',
	'decode_output',
	'to_buffer',
)

import typing
import collections.abc
import dataclasses

from eth_utils import decode_hex, keccak

from .errors import ArityError, DecodeError, UnknownMemberError, ValueTypeError
from .typesig import parse
from ._internal import reflect
from ._internal.builder import build_tuple
from ._internal.codecs import WORD, DecoderState

if typing.TYPE_CHECKING:
	from .contract import MemberDescriptor

CALLABLE_KINDS = ('function', 'constructor', 'fallback', 'receive')


def to_buffer(data: 'str | collections.abc.Buffer') -> bytes:
	"""
	:param data: hex string (``0x`` is optional) or raw bytes
	"""
	if isinstance(data, str):
		try:
			return decode_hex(data.strip())
		except ValueError as e:
			raise DecodeError(f'invalid hex payload {reflect.repr_value(data)}') from e
	return bytes(data)


def _words(data: bytes) -> tuple[bytes, ...]:
	return tuple(data[i : i + WORD] for i in range(0, len(data), WORD))


@dataclasses.dataclass(frozen=True, slots=True)
class CallData:
	selector: bytes
	"""
	4 bytes for functions, empty for constructors
	"""
	head: tuple[bytes, ...]
	tail: tuple[bytes, ...]

	@property
	def words(self) -> tuple[bytes, ...]:
		return self.head + self.tail

	def to_bytes(self) -> bytes:
		return self.selector + b''.join(self.head) + b''.join(self.tail)

	def to_hex(self) -> str:
		return '0x' + self.to_bytes().hex()

	def __bytes__(self) -> bytes:
		return self.to_bytes()

	def __str__(self) -> str:
		return self.to_hex()


def signature_of(name: str, types: collections.abc.Sequence[str]) -> str:
	"""
	calculates signature that is used for making method selector

	Types are used exactly as they are written in the interface document
	"""
	return name + '(' + ','.join(types) + ')'


def selector_of(name: str, types: collections.abc.Sequence[str]) -> bytes:
	return keccak(text=signature_of(name, types))[:4]


def event_topic_of(name: str, types: collections.abc.Sequence[str]) -> bytes:
	return keccak(text=signature_of(name, types))


def encode(types: collections.abc.Sequence[str], args: collections.abc.Sequence) -> bytes:
	"""
	Encodes values as an in-place tuple, without selector
	"""
	encoder = build_tuple(tuple(parse(t) for t in types))
	return encoder.encode(args)


def decode(
	types: collections.abc.Sequence[str], encoded: 'str | collections.abc.Buffer'
) -> list[typing.Any]:
	decoder = build_tuple(tuple(parse(t) for t in types))
	state = DecoderState(memoryview(to_buffer(encoded)), 0, 0)
	return list(decoder.decode_here(state))


class MethodEncoder:
	__slots__ = ('_encoder', '_decoder', '_selector', '_signature')

	def __init__(
		self,
		name: str,
		params: collections.abc.Sequence[str],
		ret: collections.abc.Sequence[str] = (),
		*,
		with_selector: bool = True,
	):
		self._signature = signature_of(name, params)
		with reflect.context_notes(f'while building encoder for `{self._signature}`'):
			self._encoder = build_tuple(tuple(parse(t) for t in params))
			self._decoder = build_tuple(tuple(parse(t) for t in ret))
		if with_selector:
			self._selector = keccak(text=self._signature)[:4]
		else:
			self._selector = b''

	@property
	def signature(self) -> str:
		return self._signature

	@property
	def selector(self) -> bytes:
		return self._selector

	def encode_call(self, args: collections.abc.Sequence[typing.Any]) -> CallData:
		expected = len(self._encoder.elem_codecs)
		if len(args) != expected:
			raise ArityError(
				f'`{self._signature}` takes {expected} arguments, got {len(args)}'
			)
		with reflect.context_notes(f'while encoding call to `{self._signature}`'):
			state = self._encoder.encode_regions(args)
		return CallData(self._selector, _words(bytes(state.head)), _words(bytes(state.tail)))

	def decode_ret(self, data: 'str | collections.abc.Buffer') -> list[typing.Any]:
		state = DecoderState(memoryview(to_buffer(data)), 0, 0)
		with reflect.context_notes(f'while decoding result of `{self._signature}`'):
			return list(self._decoder.decode_here(state))


def _member_encoder(member: 'MemberDescriptor') -> MethodEncoder:
	if member.kind not in CALLABLE_KINDS:
		raise UnknownMemberError(f'`{member.kind}` `{member.name}` is not callable')
	return MethodEncoder(
		member.name,
		member.input_types,
		member.output_types,
		with_selector=member.kind == 'function',
	)


def encode_call(member: 'MemberDescriptor', args: collections.abc.Sequence[typing.Any]) -> CallData:
	"""
	:raises ArityError: if ``args`` count differs from inputs count
	:raises RangeError: if any numeric value does not fit into its declared type
	"""
	return _member_encoder(member).encode_call(args)


def encode_deploy(
	bytecode: 'str | collections.abc.Buffer',
	member: 'MemberDescriptor | None',
	args: collections.abc.Sequence[typing.Any] = (),
) -> str:
	"""
	Appends encoded constructor arguments to creation bytecode

	:param member: constructor descriptor, :py:obj:`None` if contract does not declare one
	"""
	if isinstance(bytecode, str):
		code_hex = bytecode.strip()
		if code_hex[:2] in ('0x', '0X'):
			code_hex = code_hex[2:]
		try:
			bytes.fromhex(code_hex)
		except ValueError as e:
			raise ValueTypeError('bytecode is not a hex string') from e
	else:
		code_hex = bytes(bytecode).hex()
	if member is None:
		if len(args) != 0:
			raise ArityError(f'contract has no constructor, got {len(args)} arguments')
		return '0x' + code_hex
	if member.kind != 'constructor':
		raise UnknownMemberError(f'expected constructor, got `{member.kind}`')
	return '0x' + code_hex + encode_call(member, args).to_bytes().hex()


def decode_output(member: 'MemberDescriptor', data: 'str | collections.abc.Buffer') -> list[typing.Any]:
	return _member_encoder(member).decode_ret(data)
