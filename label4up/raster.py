"""
PDF page rasterization.
"""

# Standard Library
import os
import pathlib

# PIP3 modules
import fitz
import PIL.Image

# local repo modules
import label4up as l4u
import label4up.config
import label4up.errors


InputReadError = l4u.errors.InputReadError

RENDER_SCALE = l4u.config.RENDER_SCALE


class SourceDocument:
	"""
	An open input PDF. Close it when done, or use it as a context manager.
	"""

	def __init__(self, document: fitz.Document, name: str) -> None:
		self.document = document
		self.name = name
		self.closed = False

	@property
	def page_count(self) -> int:
		return self.document.page_count

	def page_size(self, page_index: int) -> tuple[float, float]:
		"""
		Get the native page size in points.

		Args:
			page_index: Zero-based page index.

		Returns:
			Tuple of (width, height).
		"""
		rect = self.document[page_index].rect
		return (rect.width, rect.height)

	def render_page(self, page_index: int, scale: float = RENDER_SCALE) -> PIL.Image.Image:
		"""
		Render one page over an opaque white background.

		Args:
			page_index: Zero-based page index.
			scale: Pixels per point.

		Returns:
			RGBA image of the page.
		"""
		try:
			page = self.document.load_page(page_index)
			matrix = fitz.Matrix(scale, scale)
			pixmap = page.get_pixmap(matrix=matrix, alpha=False)
			image = PIL.Image.frombytes("RGB", [pixmap.width, pixmap.height], pixmap.samples)
		except (RuntimeError, ValueError) as error:
			message = f"Could not render page {page_index + 1} of {self.name}: {error}"
			raise InputReadError(message) from error
		return image.convert("RGBA")

	def close(self) -> None:
		if self.closed:
			return
		self.document.close()
		self.closed = True

	def __enter__(self) -> "SourceDocument":
		return self

	def __exit__(self, exc_type, exc_value, traceback) -> None:
		self.close()


#============================================
def read_input_bytes(source) -> bytes:
	"""
	Read a PDF input into memory.

	Args:
		source: Bytes-like object, filesystem path, or binary file object.

	Returns:
		Raw PDF bytes.
	"""
	if isinstance(source, (bytes, bytearray, memoryview)):
		return bytes(source)
	if isinstance(source, (str, os.PathLike)):
		try:
			return pathlib.Path(source).read_bytes()
		except OSError as error:
			raise InputReadError(f"Could not read {source}: {error}") from error
	if hasattr(source, "read"):
		data = source.read()
		if isinstance(data, str):
			raise InputReadError("Input file object must be opened in binary mode.")
		return bytes(data)
	raise InputReadError(f"Unsupported input type: {type(source).__name__}")


#============================================
def describe_input(source, index: int) -> str:
	"""
	Build a short display name for an input.
	"""
	if isinstance(source, (str, os.PathLike)):
		return pathlib.Path(source).name
	name = getattr(source, "name", None)
	if isinstance(name, str) and name:
		return pathlib.Path(name).name
	return f"input #{index + 1}"


#============================================
def open_document(data: bytes, name: str = "input") -> SourceDocument:
	"""
	Open a PDF from memory.

	Args:
		data: Raw PDF bytes.
		name: Display name used in error messages.

	Returns:
		SourceDocument wrapping the PyMuPDF handle.
	"""
	if not data:
		raise InputReadError(f"Could not read {name}: input is empty.")
	try:
		document = fitz.open(stream=data, filetype="pdf")
	except (RuntimeError, ValueError) as error:
		raise InputReadError(f"Could not read {name}: {error}") from error
	if not document.is_pdf:
		document.close()
		raise InputReadError(f"Could not read {name}: not a PDF document.")
	return SourceDocument(document, name)
