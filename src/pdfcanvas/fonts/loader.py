# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Locating AFM metrics files for the built-in fonts."""

import logging
import os
from importlib import resources
from pathlib import Path

from ..exceptions import MetricsNotFoundError
from .constants import AFM_PATH_ENV

logger = logging.getLogger(__name__)


class AfmLoader:
    """Reads raw AFM data by font name.

    A directory given as ``search_path`` (or through the
    ``PDFCANVAS_AFM_PATH`` environment variable) is checked for
    ``<FontName>.afm`` first. If the file is not there, the metrics shipped
    with the package are used.
    """

    def __init__(self, search_path: str | Path | None = None) -> None:
        """Initializes the AfmLoader.

        Args:
            search_path: Directory with AFM files. Defaults to the value of
                the PDFCANVAS_AFM_PATH environment variable, if set.
        """
        if search_path is None:
            search_path = os.environ.get(AFM_PATH_ENV) or None
        self.search_path = Path(search_path) if search_path is not None else None

    def find(self, font_name: str) -> Path | None:
        """Returns the AFM file in the search path for a font, if any."""
        if self.search_path is None:
            return None
        candidate = self.search_path / f"{font_name}.afm"
        if candidate.is_file():
            return candidate
        return None

    def load(self, font_name: str) -> bytes:
        """Loads the AFM data for a font.

        Args:
            font_name: PostScript name of the font, e.g. ``Times-Roman``.

        Returns:
            The raw AFM file content.

        Raises:
            MetricsNotFoundError: If no metrics exist for the font.
        """
        path = self.find(font_name)
        if path is not None:
            logger.debug("Loading metrics for %s from %s", font_name, path)
            try:
                return path.read_bytes()
            except OSError as e:
                raise MetricsNotFoundError(
                    f"Could not read metrics file '{path}': {e}"
                ) from e

        afm_ref = resources.files("pdfcanvas") / "resources" / "afm" / f"{font_name}.afm"
        if not afm_ref.is_file():
            raise MetricsNotFoundError(f"No metrics available for font '{font_name}'")
        logger.debug("Loading packaged metrics for %s", font_name)
        return afm_ref.read_bytes()
