"""
Exceptions raised by the codec

Every error derives from :py:class:`AbiError` and from the builtin exception that
matches its meaning, so ``except ValueError`` keeps working for callers that do
not care about the codec taxonomy
"""

__all__ = (
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


class AbiError(Exception):
	pass


class MalformedTypeError(AbiError, ValueError):
	"""
	Type string does not follow ``baseName [digits] ['[' [digits] ']']``
	"""


class UnsupportedTypeError(MalformedTypeError):
	"""
	Type string is well-formed for solidity but this codec can not lay it out
	(nested arrays, tuples)
	"""


class InterfaceParseError(AbiError, ValueError):
	pass


class ArityError(AbiError, TypeError):
	pass


class ValueTypeError(AbiError, TypeError):
	"""
	Python value can not represent the declared type (``str`` passed for ``uint256``, ...)
	"""


class RangeError(AbiError, ValueError):
	"""
	Value does not fit into declared width or violates sign
	"""


class UnknownMemberError(AbiError, LookupError):
	pass


class DecodeError(AbiError, ValueError):
	pass


class ChunkIndexError(AbiError, IndexError):
	pass


class MissingAddressError(AbiError, ValueError):
	"""
	Contract proxy is not bound to an address yet
	"""
