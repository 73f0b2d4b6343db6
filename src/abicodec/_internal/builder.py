import functools

from ..typesig import ArrayKind, BaseKind, TypeDescriptor
from .codecs import (
	AddressCodec,
	ArrayCodec,
	BoolCodec,
	BytesCodec,
	Codec,
	DynArrayCodec,
	FixedBytesCodec,
	FixedPointCodec,
	IntCodec,
	StringCodec,
	TupleCodec,
)

_bool_codec = BoolCodec()
_address_codec = AddressCodec()
_bytes_codec = BytesCodec()
_string_codec = StringCodec()


def _build_scalar(desc: TypeDescriptor) -> Codec:
	match desc.kind:
		case BaseKind.UINT:
			return IntCodec(desc.bits, False)  # type: ignore
		case BaseKind.INT:
			return IntCodec(desc.bits, True)  # type: ignore
		case BaseKind.BOOL:
			return _bool_codec
		case BaseKind.ADDRESS:
			return _address_codec
		case BaseKind.FIXED_BYTES:
			return FixedBytesCodec(desc.size)  # type: ignore
		case BaseKind.BYTES:
			return _bytes_codec
		case BaseKind.STRING:
			return _string_codec
		case BaseKind.FIXED:
			return FixedPointCodec(desc.bits, desc.decimals, True)  # type: ignore
		case BaseKind.UFIXED:
			return FixedPointCodec(desc.bits, desc.decimals, False)  # type: ignore


@functools.lru_cache(maxsize=1024)
def build(desc: TypeDescriptor) -> Codec:
	elem = _build_scalar(desc.element)
	match desc.array:
		case ArrayKind.NONE:
			return elem
		case ArrayKind.FIXED:
			return ArrayCodec(elem, desc.length)  # type: ignore
		case ArrayKind.DYNAMIC:
			return DynArrayCodec(elem)


def build_tuple(descs: tuple[TypeDescriptor, ...]) -> TupleCodec:
	return TupleCodec(tuple(build(d) for d in descs))
