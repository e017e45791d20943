"""
Caller-facing conversion errors.
"""


class ConversionError(Exception):
	"""
	Base class for failures that abort a conversion run.
	"""


class InputReadError(ConversionError):
	"""
	An input document could not be read, parsed or rendered.
	"""


class OutputWriteError(ConversionError):
	"""
	The output document could not be produced.
	"""
