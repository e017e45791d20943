"""
Pytest configuration for local imports and test PDFs.
"""

# Standard Library
import io
import os
import sys

# PIP3 modules
import pytest
import reportlab.pdfgen.canvas

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
def build_label_pdf(pages: list[tuple[float, float, list[tuple[float, float, float, float]]]]) -> bytes:
	"""
	Build a PDF with black rectangles drawn on white pages.

	Args:
		pages: Per page, a tuple of (width, height, rects) where each rect is
			(x, y, width, height) in points from the top-left corner.

	Returns:
		PDF bytes.
	"""
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(buffer)
	for page_width, page_height, rects in pages:
		pdf.setPageSize((page_width, page_height))
		pdf.setFillColorRGB(0.0, 0.0, 0.0)
		for rect_x, rect_y, rect_width, rect_height in rects:
			bottom = page_height - rect_y - rect_height
			pdf.rect(rect_x, bottom, rect_width, rect_height, stroke=0, fill=1)
		pdf.showPage()
	pdf.save()
	return buffer.getvalue()


@pytest.fixture
def label_pdf():
	return build_label_pdf
