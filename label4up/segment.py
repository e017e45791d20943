"""
Label detection, cropping and orientation.
"""

# Standard Library
import math

# PIP3 modules
import PIL.Image
import PIL.ImageChops

# local repo modules
import label4up as l4u
import label4up.config


Region = l4u.config.Region

WHITE_THRESHOLD = l4u.config.WHITE_THRESHOLD
DEFAULT_PADDING_PX = l4u.config.DEFAULT_PADDING_PX
REGION_FRACTION = l4u.config.REGION_FRACTION
MODE_AUTO = l4u.config.MODE_AUTO
MODE_PORTRAIT = l4u.config.MODE_PORTRAIT
MODE_LANDSCAPE = l4u.config.MODE_LANDSCAPE


#============================================
def clamp(value: int, low: int, high: int) -> int:
	return max(low, min(high, value))


#============================================
def build_content_mask(image: PIL.Image.Image, threshold: int) -> PIL.Image.Image:
	"""
	Build a mask of content pixels.

	A pixel is content when it is not fully transparent and at least one
	color channel is below the threshold.

	Args:
		image: Source raster.
		threshold: Whiteness threshold in 0..255.

	Returns:
		Mode "L" mask, 255 for content and 0 elsewhere.
	"""
	if not 0 <= threshold <= 255:
		raise ValueError(f"threshold must be in 0..255, got {threshold}")
	red, green, blue, alpha = image.convert("RGBA").split()
	dark_table = [255 if value < threshold else 0 for value in range(256)]
	opaque_table = [0] + [255] * 255
	dark = PIL.ImageChops.lighter(red.point(dark_table), green.point(dark_table))
	dark = PIL.ImageChops.lighter(dark, blue.point(dark_table))
	return PIL.ImageChops.darker(dark, alpha.point(opaque_table))


#============================================
def find_non_white_bbox(image: PIL.Image.Image, threshold: int = WHITE_THRESHOLD) -> Region | None:
	"""
	Find the tightest box around all content pixels.

	Args:
		image: Source raster.
		threshold: Whiteness threshold in 0..255.

	Returns:
		Region covering every content pixel, or None for a blank raster.
	"""
	bbox = build_content_mask(image, threshold).getbbox()
	if bbox is None:
		return None
	left, upper, right, lower = bbox
	return Region(x=left, y=upper, width=right - left, height=lower - upper)


#============================================
def compute_search_region(
	width: int,
	height: int,
	region_fraction: float = REGION_FRACTION,
) -> Region:
	"""
	Compute the upper part of a page that holds the label.

	Args:
		width: Page raster width.
		height: Page raster height.
		region_fraction: Fraction of the page height to keep.

	Returns:
		Region anchored at the top-left corner.
	"""
	region_height = max(1, int(math.floor(height * region_fraction)))
	region_width = max(1, width)
	return Region(x=0, y=0, width=region_width, height=region_height)


#============================================
def compute_crop_box(bbox: Region, bounds_width: int, bounds_height: int, padding: int) -> Region:
	"""
	Pad a box and clamp it to the given bounds.

	Args:
		bbox: Detected box.
		bounds_width: Width of the area being cropped.
		bounds_height: Height of the area being cropped.
		padding: Padding in pixels on every side.

	Returns:
		Crop region, at least 1x1 and inside the bounds.
	"""
	x = clamp(bbox.x - padding, 0, bounds_width - 1)
	y = clamp(bbox.y - padding, 0, bounds_height - 1)
	max_x = clamp(bbox.x + bbox.width + padding, 1, bounds_width)
	max_y = clamp(bbox.y + bbox.height + padding, 1, bounds_height)
	crop_width = max(1, max_x - x)
	crop_height = max(1, max_y - y)
	return Region(x=x, y=y, width=crop_width, height=crop_height)


#============================================
def crop_label(
	page_image: PIL.Image.Image,
	threshold: int = WHITE_THRESHOLD,
	padding: int = DEFAULT_PADDING_PX,
	region_fraction: float = REGION_FRACTION,
) -> PIL.Image.Image:
	"""
	Crop the label out of a rendered page.

	Detection only looks at the upper part of the page. A blank region is
	kept whole instead of failing.

	Args:
		page_image: Rendered page raster.
		threshold: Whiteness threshold.
		padding: Padding around the detected label in pixels.
		region_fraction: Fraction of the page height searched.

	Returns:
		New RGBA raster holding the padded label.
	"""
	search = compute_search_region(page_image.width, page_image.height, region_fraction)
	region_image = page_image.crop((search.x, search.y, search.x + search.width, search.y + search.height))
	bbox = find_non_white_bbox(region_image, threshold)
	if bbox is None:
		bbox = Region(x=0, y=0, width=search.width, height=search.height)
	box = compute_crop_box(bbox, search.width, search.height, padding)
	cropped = region_image.crop((box.x, box.y, box.x + box.width, box.y + box.height))
	return cropped.convert("RGBA")


#============================================
def is_portrait(image: PIL.Image.Image) -> bool:
	return image.height >= image.width


#============================================
def rotate_90(image: PIL.Image.Image) -> PIL.Image.Image:
	"""
	Rotate a raster 90 degrees clockwise without clipping.
	"""
	return image.transpose(PIL.Image.Transpose.ROTATE_270)


#============================================
def normalize_orientation(image: PIL.Image.Image, mode: str) -> PIL.Image.Image:
	"""
	Rotate a label to the requested orientation.

	Args:
		image: Cropped label raster.
		mode: One of auto, portrait, landscape.

	Returns:
		The same image in auto mode or when it already matches, otherwise
		a rotated copy.
	"""
	if mode == MODE_AUTO:
		return image
	if mode not in (MODE_PORTRAIT, MODE_LANDSCAPE):
		raise ValueError(f"Unknown orientation mode: {mode!r}")
	wants_portrait = mode == MODE_PORTRAIT
	if is_portrait(image) == wants_portrait:
		return image
	return rotate_90(image)
