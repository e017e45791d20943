"""
Sheet composition and PDF output.
"""

# Standard Library
import io

# PIP3 modules
import PIL.Image
import pypdf
import pypdf.errors
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import label4up as l4u
import label4up.config
import label4up.errors


SlotRect = l4u.config.SlotRect
FitRect = l4u.config.FitRect
Placement = l4u.config.Placement
OutputWriteError = l4u.errors.OutputWriteError

A4_WIDTH_PT = l4u.config.A4_WIDTH_PT
A4_HEIGHT_PT = l4u.config.A4_HEIGHT_PT
MARGIN_PT = l4u.config.MARGIN_PT
COLUMNS = l4u.config.COLUMNS
ROWS = l4u.config.ROWS
LABELS_PER_SHEET = l4u.config.LABELS_PER_SHEET


#============================================
def compute_slot_rect(slot_index: int) -> SlotRect:
	"""
	Compute the cell for a slot on an A4 sheet.

	Slots are row-major from the top: 0 top-left, 1 top-right, 2 bottom-left,
	3 bottom-right. Coordinates use the PDF origin at the bottom-left.

	Args:
		slot_index: Slot index in 0..3.

	Returns:
		SlotRect in points.
	"""
	if not 0 <= slot_index < LABELS_PER_SHEET:
		raise ValueError(f"slot_index must be in 0..{LABELS_PER_SHEET - 1}, got {slot_index}")
	inner_width = A4_WIDTH_PT - MARGIN_PT * 2.0
	inner_height = A4_HEIGHT_PT - MARGIN_PT * 2.0
	cell_width = inner_width / COLUMNS
	cell_height = inner_height / ROWS
	col = slot_index % COLUMNS
	row = slot_index // COLUMNS
	cell_x = MARGIN_PT + col * cell_width
	cell_y = A4_HEIGHT_PT - MARGIN_PT - (row + 1) * cell_height
	return SlotRect(x=cell_x, y=cell_y, width=cell_width, height=cell_height)


#============================================
def fit_rect(src_width: float, src_height: float, dst_width: float, dst_height: float) -> FitRect:
	"""
	Scale a box uniformly into another and center it.

	Args:
		src_width: Source width.
		src_height: Source height.
		dst_width: Target width.
		dst_height: Target height.

	Returns:
		FitRect with scaled size and centering offsets.
	"""
	if min(src_width, src_height, dst_width, dst_height) <= 0:
		raise ValueError("fit_rect needs positive dimensions")
	scale = min(dst_width / src_width, dst_height / src_height)
	width = src_width * scale
	height = src_height * scale
	return FitRect(
		width=width,
		height=height,
		offset_x=(dst_width - width) / 2.0,
		offset_y=(dst_height - height) / 2.0,
	)


#============================================
def encode_png(image: PIL.Image.Image) -> bytes:
	"""
	Encode a label raster as PNG.

	Args:
		image: Label raster.

	Returns:
		PNG bytes.
	"""
	buffer = io.BytesIO()
	try:
		image.convert("RGB").save(buffer, format="PNG")
	except (OSError, ValueError) as error:
		raise OutputWriteError(f"Failed to export cropped label image: {error}") from error
	data = buffer.getvalue()
	if not data:
		raise OutputWriteError("Failed to export cropped label image.")
	return data


#============================================
def build_label_tile(png_bytes: bytes, width: int, height: int) -> pypdf.PageObject:
	"""
	Build a one-page PDF holding the label image at one point per pixel.

	Args:
		png_bytes: Encoded label image.
		width: Image width in pixels.
		height: Image height in pixels.

	Returns:
		PDF page object.
	"""
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=(width, height))
	image_reader = reportlab.lib.utils.ImageReader(io.BytesIO(png_bytes))
	pdf.drawImage(
		image_reader,
		0,
		0,
		width=width,
		height=height,
		mask=None,
		preserveAspectRatio=False,
		anchor="sw",
	)
	pdf.save()
	buffer.seek(0)
	reader = pypdf.PdfReader(buffer)
	return reader.pages[0]


class SheetCompositor:
	"""
	Places labels four to a sheet, in order, onto a new PDF.
	"""

	def __init__(self) -> None:
		self.writer = pypdf.PdfWriter()
		self.label_count = 0
		self.sheet_count = 0
		self.placements: list[Placement] = []
		self.current_sheet: pypdf.PageObject | None = None

	def add_sheet(self) -> pypdf.PageObject:
		page = pypdf.PageObject.create_blank_page(width=A4_WIDTH_PT, height=A4_HEIGHT_PT)
		self.writer.add_page(page)
		self.sheet_count += 1
		self.current_sheet = self.writer.pages[-1]
		return self.current_sheet

	def place_label(self, image: PIL.Image.Image) -> Placement:
		"""
		Embed a label raster in the next free slot.

		Args:
			image: Oriented label raster.

		Returns:
			Placement describing where the label went.
		"""
		slot_index = self.label_count % LABELS_PER_SHEET
		if slot_index == 0:
			self.add_sheet()
		png_bytes = encode_png(image)
		try:
			tile = build_label_tile(png_bytes, image.width, image.height)
		except (OSError, ValueError, pypdf.errors.PyPdfError) as error:
			raise OutputWriteError(f"Failed to embed label image: {error}") from error

		slot = compute_slot_rect(slot_index)
		fit = fit_rect(image.width, image.height, slot.width, slot.height)
		scale = fit.width / image.width
		image_x = slot.x + fit.offset_x
		image_y = slot.y + fit.offset_y
		transform = pypdf.Transformation().scale(scale, scale).translate(image_x, image_y)
		self.current_sheet.merge_transformed_page(tile, transform)

		placement = Placement(
			label_index=self.label_count,
			sheet_index=self.sheet_count - 1,
			slot_index=slot_index,
			x=image_x,
			y=image_y,
			width=fit.width,
			height=fit.height,
			image_width=image.width,
			image_height=image.height,
		)
		self.placements.append(placement)
		self.label_count += 1
		return placement

	def to_bytes(self) -> bytes:
		buffer = io.BytesIO()
		try:
			self.writer.write(buffer)
		except (OSError, ValueError, pypdf.errors.PyPdfError) as error:
			raise OutputWriteError(f"Failed to write output PDF: {error}") from error
		return buffer.getvalue()
