"""
Decoding of event logs

Non-indexed fields are encoded in log data as an in-place tuple. Indexed fields live in topics:
static values as one word, dynamic values and arrays as keccak256 of their encoding
(which can not be reversed, so raw 32 bytes are returned)
"""

__all__ = ('decode_event', 'field_names')

import typing
import collections.abc

from .errors import DecodeError, UnknownMemberError
from .calldata import decode, to_buffer

if typing.TYPE_CHECKING:
	from .contract import MemberDescriptor


def field_names(member: 'MemberDescriptor') -> list[str]:
	"""
	:returns: input names, unnamed inputs are called ``_<position>``
	"""
	return [p.name or f'_{i}' for i, p in enumerate(member.inputs)]


def decode_event(
	member: 'MemberDescriptor',
	data: 'str | collections.abc.Buffer',
	topics: 'collections.abc.Sequence[str | collections.abc.Buffer]' = (),
) -> dict[str, typing.Any]:
	"""
	:param topics: log topics including the signature topic; when empty indexed fields are omitted
	:returns: mapping from field name to value, in declaration order
	"""
	if member.kind != 'event':
		raise UnknownMemberError(f'`{member.name}` is a {member.kind}, not an event')

	names = field_names(member)
	plain_at = [i for i, p in enumerate(member.inputs) if not p.indexed]
	indexed_at = [i for i, p in enumerate(member.inputs) if p.indexed]

	decoded: dict[int, typing.Any] = {}
	plain_vals = decode([member.inputs[i].type for i in plain_at], data)
	decoded.update(zip(plain_at, plain_vals))

	if len(topics) != 0:
		topic_bufs = [to_buffer(t) for t in topics]
		if not member.anonymous:
			if topic_bufs[0] != member.topic:
				raise DecodeError(
					f'log topic 0x{topic_bufs[0].hex()} does not belong to `{member.signature}`'
				)
			topic_bufs = topic_bufs[1:]
		if len(topic_bufs) != len(indexed_at):
			raise DecodeError(
				f'`{member.signature}` has {len(indexed_at)} indexed fields, got {len(topic_bufs)} topics'
			)
		for i, topic in zip(indexed_at, topic_bufs):
			if len(topic) != 32:
				raise DecodeError(f'topic must be 32 bytes, got {len(topic)}')
			desc = member.inputs[i].descriptor
			if desc.is_dynamic or desc.is_array:
				decoded[i] = topic
			else:
				decoded[i] = decode([member.inputs[i].type], topic)[0]

	return {names[i]: decoded[i] for i in sorted(decoded)}
