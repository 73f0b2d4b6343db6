"""
Random access to words of a returned payload

Caller is responsible for choosing correct indices: for a function returning
``(uint256, string)`` chunk 0 is the number, chunk 1 the offset, chunk 2 the string length
"""

__all__ = ('DataChunks', 'CHUNK_HEX_LEN')

import re
import typing
import collections.abc

from .errors import ChunkIndexError, DecodeError

CHUNK_HEX_LEN = 64

_HEX_RE = re.compile(r'[0-9a-fA-F]*')


def _clean(s: str) -> str:
	start = 0
	end = len(s)
	while start < end and not s[start].isprintable():
		start += 1
	while end > start and not s[end - 1].isprintable():
		end -= 1
	return s[start:end]


class DataChunks(collections.abc.Sequence[str]):
	"""
	Payload split into 32-byte (64 hex characters) chunks
	"""

	__slots__ = ('_chunks',)

	_chunks: tuple[str, ...]

	def __init__(self, chunks: collections.abc.Iterable[str]):
		self._chunks = tuple(chunks)
		for c in self._chunks:
			if len(c) != CHUNK_HEX_LEN:
				raise DecodeError(f'chunk must have {CHUNK_HEX_LEN} hex characters, got {len(c)}')
			if _HEX_RE.fullmatch(c) is None:
				raise DecodeError(f'chunk {c!r} is not a hex string')

	@staticmethod
	def from_hex(payload: str) -> 'DataChunks':
		payload = payload.strip()
		if payload[:2] in ('0x', '0X'):
			payload = payload[2:]
		if len(payload) % CHUNK_HEX_LEN != 0:
			raise DecodeError(
				f'payload length {len(payload)} is not a multiple of {CHUNK_HEX_LEN}'
			)
		try:
			bytes.fromhex(payload)
		except ValueError as e:
			raise DecodeError('payload is not a hex string') from e
		return DataChunks(
			payload[i : i + CHUNK_HEX_LEN] for i in range(0, len(payload), CHUNK_HEX_LEN)
		)

	def __len__(self) -> int:
		return len(self._chunks)

	@typing.overload
	def __getitem__(self, index: int) -> str: ...

	@typing.overload
	def __getitem__(self, index: slice) -> collections.abc.Sequence[str]: ...

	def __getitem__(self, index):
		if isinstance(index, slice):
			return self._chunks[index]
		return self.chunk(index)

	def __iter__(self) -> collections.abc.Iterator[str]:
		return iter(self._chunks)

	def __repr__(self) -> str:
		return f'DataChunks({list(self._chunks)!r})'

	def chunk(self, index: int) -> str:
		if not 0 <= index < len(self._chunks):
			raise ChunkIndexError(
				f'chunk index {index} out of range, payload has {len(self._chunks)} chunks'
			)
		return self._chunks[index]

	def decode_uint(self, index: int) -> int:
		return int(self.chunk(index), 16)

	def decode_int(self, index: int) -> int:
		return int.from_bytes(bytes.fromhex(self.chunk(index)), 'big', signed=True)

	def decode_bool(self, index: int) -> bool:
		return self.decode_uint(index) != 0

	def decode_address(self, index: int) -> str:
		"""
		:returns: ``0x`` followed by last 40 hex characters of the chunk, case is preserved
		"""
		return '0x' + self.chunk(index)[-40:]

	def decode_bytes(self, index: int) -> bytes:
		"""
		treats chunk at ``index`` as a length word and reads payload from the following chunks
		"""
		le = self.decode_uint(index)
		needed = (le + 31) // 32
		available = len(self._chunks) - index - 1
		if needed > available:
			raise DecodeError(
				f'length word at {index} requires {needed} chunks, only {available} follow'
			)
		payload = ''.join(self._chunks[index + 1 : index + 1 + needed])
		return bytes.fromhex(payload)[:le]

	def decode_string(self, index: int, *, clean: bool = True) -> str:
		"""
		:param clean: trim non-printable characters (padding) at both ends
		"""
		try:
			res = str(self.decode_bytes(index), 'utf-8')
		except UnicodeDecodeError as e:
			raise DecodeError(f'string at chunk {index} is not valid utf-8') from e
		if clean:
			res = _clean(res)
		return res
