"""
Conversion pipeline from label PDFs to 4-up A4 sheets.
"""

# Standard Library
import collections.abc

# local repo modules
import label4up as l4u
import label4up.config
import label4up.raster
import label4up.render
import label4up.segment


ConversionOptions = l4u.config.ConversionOptions
ConversionResult = l4u.config.ConversionResult
ProgressEvent = l4u.config.ProgressEvent
SourceDocument = l4u.raster.SourceDocument
SheetCompositor = l4u.render.SheetCompositor

PROGRESS_BAR_WIDTH = l4u.config.PROGRESS_BAR_WIDTH
OUTPUT_MESSAGE = l4u.config.OUTPUT_MESSAGE

ProgressCallback = collections.abc.Callable[[ProgressEvent], None]


#============================================
def print_progress(event: ProgressEvent) -> None:
	"""
	Print a simple progress bar for a conversion run.

	Args:
		event: Progress event from convert_labels.
	"""
	if event.total <= 0:
		print(event.message)
		return
	percent = int(round((event.current / event.total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{event.message} [{bar}] {event.current}/{event.total} ({percent}%)", end="\r")
	if event.message == OUTPUT_MESSAGE:
		print()


#============================================
def ignore_progress(event: ProgressEvent) -> None:
	return None


#============================================
def as_input_list(inputs) -> list:
	"""
	Accept a single input or a sequence of inputs.
	"""
	if inputs is None:
		return []
	if isinstance(inputs, (list, tuple)):
		return list(inputs)
	return [inputs]


#============================================
def convert_labels(
	inputs,
	options: ConversionOptions | None = None,
	on_progress: ProgressCallback | None = None,
) -> ConversionResult:
	"""
	Crop one label per page and lay them out four per A4 sheet.

	Every document is opened up front so the total page count is known for
	progress. All opened documents are closed before returning or raising.

	Args:
		inputs: PDF input or list of inputs (bytes, path, or binary file).
		options: Conversion options; defaults to auto orientation.
		on_progress: Called before each page and before writing the output.

	Returns:
		ConversionResult holding the output PDF bytes.
	"""
	if options is None:
		options = ConversionOptions()
	options = l4u.config.validate_options(options)
	if on_progress is None:
		on_progress = ignore_progress

	sources = as_input_list(inputs)
	compositor = SheetCompositor()
	documents: list[SourceDocument] = []
	try:
		total_pages = 0
		for index, source in enumerate(sources):
			name = l4u.raster.describe_input(source, index)
			data = l4u.raster.read_input_bytes(source)
			document = l4u.raster.open_document(data, name)
			documents.append(document)
			total_pages += document.page_count

		processed_pages = 0
		for doc_index, document in enumerate(documents):
			page_count = document.page_count
			for page_index in range(page_count):
				message = (
					f"Processing: file {doc_index + 1}/{len(documents)}, "
					f"page {page_index + 1}/{page_count}"
				)
				on_progress(ProgressEvent(current=processed_pages + 1, total=total_pages, message=message))

				page_image = document.render_page(page_index, options.render_scale)
				label_image = l4u.segment.crop_label(
					page_image,
					threshold=options.white_threshold,
					padding=options.padding_px,
					region_fraction=options.region_fraction,
				)
				label_image = l4u.segment.normalize_orientation(label_image, options.mode)
				compositor.place_label(label_image)
				processed_pages += 1

		on_progress(ProgressEvent(current=total_pages, total=total_pages, message=OUTPUT_MESSAGE))
		pdf_bytes = compositor.to_bytes()
	finally:
		for document in documents:
			document.close()

	return ConversionResult(
		pdf_bytes=pdf_bytes,
		sheets=compositor.sheet_count,
		total_labels=compositor.label_count,
		total_pages=total_pages,
		placements=list(compositor.placements),
	)


#============================================
def convert_labels_to_4up(
	inputs,
	options: ConversionOptions | None = None,
	on_progress: ProgressCallback | None = None,
) -> bytes:
	"""
	Same as convert_labels, returning only the PDF bytes.
	"""
	result = convert_labels(inputs, options, on_progress)
	return result.pdf_bytes
