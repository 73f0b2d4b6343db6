"""
Contract ABI codec: encodes typed arguments into call data and decodes returned words
"""

__all__ = (
	'Address',
	'BaseKind',
	'ArrayKind',
	'TypeDescriptor',
	'parse_type',
	'is_dynamic',
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
	'decode_event',
	'DataChunks',
	'Param',
	'MemberDescriptor',
	'ContractInterface',
	'ContractProxy',
	'Transport',
	'AbiError',
	'MalformedTypeError',
	'UnsupportedTypeError',
	'InterfaceParseError',
	'ArityError',
	'ValueTypeError',
	'RangeError',
	'UnknownMemberError',
	'DecodeError',
	'ChunkIndexError',
	'MissingAddressError',
)

from .errors import *
from .types import Address
from .typesig import BaseKind, ArrayKind, TypeDescriptor, is_dynamic
from .typesig import parse as parse_type
from .calldata import (
	CallData,
	MethodEncoder,
	signature_of,
	selector_of,
	event_topic_of,
	encode,
	decode,
	encode_call,
	encode_deploy,
	decode_output,
)
from .events import decode_event
from .chunks import DataChunks
from .contract import Param, MemberDescriptor, ContractInterface
from .proxy import ContractProxy, Transport
