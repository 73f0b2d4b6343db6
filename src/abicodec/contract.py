"""
Contract interface (JSON ABI) loading and member lookup

.. code-block:: python

	iface = ContractInterface(abi_json)
	data = iface.encode_call('transfer', 0, [to, 10**18]).to_hex()

Names are not unique because of overloads, so every lookup takes an explicit occurrence index
"""

__all__ = ('Param', 'MemberDescriptor', 'ContractInterface', 'MEMBER_KINDS')

import json
import typing
import logging
import collections.abc
import dataclasses

from .errors import (
	InterfaceParseError,
	MalformedTypeError,
	UnknownMemberError,
	UnsupportedTypeError,
)
from .typesig import TypeDescriptor, parse
from .calldata import (
	CallData,
	decode_output,
	encode_call,
	encode_deploy,
	event_topic_of,
	selector_of,
	signature_of,
	to_buffer,
)
from .events import decode_event
from ._internal import reflect

logger = logging.getLogger(__name__)

MEMBER_KINDS = ('function', 'constructor', 'event', 'fallback', 'receive')

_KIND_NAMED = ('constructor', 'fallback', 'receive')


@dataclasses.dataclass(frozen=True, slots=True)
class Param:
	name: str
	type: str
	"""
	type exactly as written in the document, used for signatures
	"""
	indexed: bool = False

	@property
	def descriptor(self) -> TypeDescriptor:
		return parse(self.type)


@dataclasses.dataclass(frozen=True, slots=True)
class MemberDescriptor:
	name: str
	"""
	member name; ``constructor``, ``fallback`` and ``receive`` are named after their kind
	"""
	kind: str
	inputs: tuple[Param, ...] = ()
	outputs: tuple[Param, ...] = ()
	state_mutability: str = 'nonpayable'
	anonymous: bool = False

	@property
	def input_types(self) -> tuple[str, ...]:
		return tuple(p.type for p in self.inputs)

	@property
	def output_types(self) -> tuple[str, ...]:
		return tuple(p.type for p in self.outputs)

	@property
	def signature(self) -> str:
		return signature_of(self.name, self.input_types)

	@property
	def selector(self) -> bytes:
		"""
		:returns: 4 byte selector for functions, empty bytes for other kinds
		"""
		if self.kind != 'function':
			return b''
		return selector_of(self.name, self.input_types)

	@property
	def topic(self) -> bytes | None:
		"""
		:returns: first log topic of an event, :py:obj:`None` for anonymous events and other kinds
		"""
		if self.kind != 'event' or self.anonymous:
			return None
		return event_topic_of(self.name, self.input_types)

	@property
	def is_constant(self) -> bool:
		return self.state_mutability in ('view', 'pure')


def _parse_params(raw: typing.Any, where: str) -> tuple[Param, ...]:
	if raw is None:
		return ()
	if not isinstance(raw, list):
		raise InterfaceParseError(f'`{where}` must be an array')
	res: list[Param] = []
	for i, p in enumerate(raw):
		if not isinstance(p, collections.abc.Mapping):
			raise InterfaceParseError(f'`{where}[{i}]` must be an object')
		typ = p.get('type')
		if not isinstance(typ, str):
			raise InterfaceParseError(f'`{where}[{i}].type` must be a string')
		name = p.get('name') or ''
		if not isinstance(name, str):
			raise InterfaceParseError(f'`{where}[{i}].name` must be a string')
		try:
			parse(typ)
		except UnsupportedTypeError:
			logger.debug('parameter %s[%d] has unsupported type %s', where, i, typ)
		except MalformedTypeError as e:
			raise InterfaceParseError(f'`{where}[{i}]` has malformed type `{typ}`') from e
		res.append(Param(name, typ, bool(p.get('indexed', False))))
	return tuple(res)


def _state_mutability(item: collections.abc.Mapping) -> str:
	mutability = item.get('stateMutability')
	if mutability is not None:
		if not isinstance(mutability, str):
			raise InterfaceParseError('`stateMutability` must be a string')
		return mutability
	# documents produced before solc 0.4.16
	if item.get('constant', False):
		return 'view'
	if item.get('payable', False):
		return 'payable'
	return 'nonpayable'


def _parse_member(item: typing.Any) -> MemberDescriptor:
	if not isinstance(item, collections.abc.Mapping):
		raise InterfaceParseError('member must be an object')
	kind = item.get('type', 'function')
	if kind not in MEMBER_KINDS:
		raise InterfaceParseError(f'unknown member type {kind!r}')
	if kind in _KIND_NAMED:
		name = kind
	else:
		name = item.get('name')
		if not isinstance(name, str) or name == '':
			raise InterfaceParseError(f'{kind} must have a non-empty `name`')
	with reflect.context_notes(f'in {kind} `{name}`'):
		inputs = _parse_params(item.get('inputs'), 'inputs')
		outputs = _parse_params(item.get('outputs'), 'outputs')
		return MemberDescriptor(
			name=name,
			kind=kind,
			inputs=inputs,
			outputs=outputs,
			state_mutability=_state_mutability(item),
			anonymous=bool(item.get('anonymous', False)),
		)


def _load_document(document: typing.Any) -> typing.Any:
	if isinstance(document, (str, bytes, bytearray)):
		try:
			return json.loads(document)
		except ValueError as e:
			raise InterfaceParseError('interface document is not valid json') from e
	return document


class ContractInterface:
	"""
	Immutable table of contract members, safe to share between threads
	"""

	__slots__ = ('_members', '_index', '_by_topic')

	_members: tuple[MemberDescriptor, ...]
	_index: dict[tuple[str, str], tuple[MemberDescriptor, ...]]
	_by_topic: dict[bytes, MemberDescriptor]

	def __init__(
		self, document: str | bytes | collections.abc.Sequence[collections.abc.Mapping]
	):
		"""
		:param document: JSON text of the interface or already decoded array of members
		:raises InterfaceParseError: if document is malformed or is not an array
		"""
		document = _load_document(document)
		if not isinstance(document, list):
			raise InterfaceParseError('interface document must be an array of members')

		members: list[MemberDescriptor] = []
		for i, item in enumerate(document):
			with reflect.context_notes(f'in member #{i}'):
				members.append(_parse_member(item))

		index: dict[tuple[str, str], list[MemberDescriptor]] = {}
		by_topic: dict[bytes, MemberDescriptor] = {}
		for m in members:
			index.setdefault((m.kind, m.name), []).append(m)
			if (topic := m.topic) is not None:
				by_topic.setdefault(topic, m)

		self._members = tuple(members)
		self._index = {k: tuple(v) for k, v in index.items()}
		self._by_topic = by_topic
		logger.debug(
			'loaded contract interface: %d members, %d functions, %d events',
			len(members),
			sum(1 for m in members if m.kind == 'function'),
			sum(1 for m in members if m.kind == 'event'),
		)

	@property
	def members(self) -> tuple[MemberDescriptor, ...]:
		return self._members

	def __len__(self) -> int:
		return len(self._members)

	def __iter__(self) -> collections.abc.Iterator[MemberDescriptor]:
		return iter(self._members)

	def __repr__(self) -> str:
		return f'ContractInterface({len(self._members)} members)'

	def overloads(self, kind: str, name: str) -> tuple[MemberDescriptor, ...]:
		return self._index.get((kind, name), ())

	def has(self, kind: str, name: str) -> bool:
		return (kind, name) in self._index

	def find(self, kind: str, name: str, index: int) -> MemberDescriptor:
		"""
		:param index: occurrence of ``name`` among members of the same ``kind``, in document order
		:raises UnknownMemberError: if there is no such member
		"""
		found = self._index.get((kind, name))
		if found is None:
			raise UnknownMemberError(f'no {kind} named `{name}`')
		if not 0 <= index < len(found):
			raise UnknownMemberError(
				f'{kind} `{name}` has {len(found)} occurrences, requested #{index}'
			)
		return found[index]

	def function(self, name: str, index: int) -> MemberDescriptor:
		return self.find('function', name, index)

	def event(self, name: str, index: int) -> MemberDescriptor:
		return self.find('event', name, index)

	def constructor(self, index: int) -> MemberDescriptor:
		return self.find('constructor', 'constructor', index)

	def fallback(self, index: int) -> MemberDescriptor:
		return self.find('fallback', 'fallback', index)

	def functions(self) -> tuple[MemberDescriptor, ...]:
		return tuple(m for m in self._members if m.kind == 'function')

	def events(self) -> tuple[MemberDescriptor, ...]:
		return tuple(m for m in self._members if m.kind == 'event')

	def event_by_topic(self, topic: 'str | collections.abc.Buffer') -> MemberDescriptor:
		as_bytes = to_buffer(topic)
		found = self._by_topic.get(as_bytes)
		if found is None:
			raise UnknownMemberError(f'no event with topic 0x{as_bytes.hex()}')
		return found

	def encode_call(
		self, name: str, index: int, args: collections.abc.Sequence[typing.Any]
	) -> CallData:
		return encode_call(self.function(name, index), args)

	def encode_deploy(
		self,
		bytecode: 'str | collections.abc.Buffer',
		args: collections.abc.Sequence[typing.Any] = (),
	) -> str:
		"""
		Uses first constructor of the document, or none if contract does not declare any
		"""
		ctors = self.overloads('constructor', 'constructor')
		return encode_deploy(bytecode, ctors[0] if ctors else None, args)

	def decode_output(
		self, name: str, index: int, data: 'str | collections.abc.Buffer'
	) -> list[typing.Any]:
		return decode_output(self.function(name, index), data)

	def decode_event(
		self,
		name: str,
		index: int,
		data: 'str | collections.abc.Buffer',
		topics: 'collections.abc.Sequence[str | collections.abc.Buffer]' = (),
	) -> dict[str, typing.Any]:
		return decode_event(self.event(name, index), data, topics)
