"""Fragment loading: positioned words from a PDF (pdfplumber) or renderer JSON."""

import json
import logging
from pathlib import Path
from typing import Any, List, Tuple, Union

import pdfplumber

from ..models.fragment import TextFragment

logger = logging.getLogger(__name__)

Pages = List[List[TextFragment]]


class FragmentLoadError(Exception):
    """Raised when fragments cannot be read from a source file."""
    pass


def _fragments_from_words(words: List[dict], page_index: int) -> List[TextFragment]:
    fragments = []
    for word in words:
        text = word.get('text', '').strip()
        if not text:
            continue

        x0 = float(word.get('x0', 0))
        top = float(word.get('top', 0))  # pdfplumber 'top' is already top-left based
        width = float(word.get('x1', 0)) - x0
        height = float(word.get('bottom', 0)) - top
        if width < 0 or height < 0:
            continue

        fragments.append(TextFragment(
            text=text,
            x=x0,
            y=top,
            width=width,
            height=height,
            page_index=page_index,
            font_name=word.get('fontname')
        ))
    return fragments


def read_pdf_fragments(filepath: Union[str, Path]) -> Tuple[str, Pages]:
    """Read positioned words from every page of a PDF.

    Args:
        filepath: Path to PDF file

    Returns:
        (filename, pages) with one fragment list per page, in extraction order

    Raises:
        FileNotFoundError: If filepath does not exist
        FragmentLoadError: If the PDF cannot be read
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"PDF file not found: {path}")

    try:
        with pdfplumber.open(str(path)) as pdf:
            pages = [
                _fragments_from_words(
                    page.extract_words(x_tolerance=1, y_tolerance=3, extra_attrs=["fontname"]),
                    page_index
                )
                for page_index, page in enumerate(pdf.pages)
            ]
    except Exception as e:
        raise FragmentLoadError(f"Failed to read PDF {path}: {e}") from e

    logger.debug("Read %d page(s) from %s", len(pages), path.name)
    return path.name, pages


def _pages_from_json(data: Any) -> List[List[dict]]:
    if isinstance(data, dict):
        data = data.get('pages', [])
    if not isinstance(data, list) or not all(isinstance(page, list) for page in data):
        raise ValueError("expected a list of pages, each a list of fragment objects")
    return data


def load_fragment_file(filepath: Union[str, Path]) -> Tuple[str, Pages]:
    """Load fragments produced by an external renderer.

    The JSON is either a list of pages or {"filename": ..., "pages": [...]};
    fragment objects may use camelCase keys (pageIndex, fontName).

    Raises:
        FileNotFoundError: If filepath does not exist
        FragmentLoadError: If the file is not valid fragment JSON
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Fragment file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        filename = data.get('filename', path.stem) if isinstance(data, dict) else path.stem
        pages = [
            [TextFragment.from_dict(item) for item in page]
            for page in _pages_from_json(data)
        ]
    except (json.JSONDecodeError, TypeError, ValueError, AttributeError) as e:
        raise FragmentLoadError(f"Invalid fragment file {path}: {e}") from e

    return filename, pages


def load_source(filepath: Union[str, Path]) -> Tuple[str, Pages]:
    """Load a PDF or a fragment JSON file, by extension."""
    path = Path(filepath)
    if path.suffix.lower() == '.json':
        return load_fragment_file(path)
    return read_pdf_fragments(path)
