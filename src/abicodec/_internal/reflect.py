import typing
import contextlib


def repr_value(val: typing.Any, limit: int = 64) -> str:
	res = repr(val)
	if len(res) > limit:
		res = res[: limit - 3] + '...'
	return res


@contextlib.contextmanager
def context_notes(notes: str) -> typing.Generator[None, None, None]:
	try:
		yield
	except BaseException as e:
		e.add_note(notes)
		raise

