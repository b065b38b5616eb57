# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Cache of parsed font metrics."""

import logging
from pathlib import Path

from .afm import FontMetrics, parse_afm
from .loader import AfmLoader

logger = logging.getLogger(__name__)


class MetricsCache:
    """Parses each font's metrics at most once.

    The cache is an ordinary object: a Document creates its own unless one
    is passed in, and several documents may share a single instance. Entries
    are never evicted. Failed loads are not cached, so a later call retries
    and raises again.
    """

    def __init__(
        self,
        search_path: str | Path | None = None,
        loader: AfmLoader | None = None,
    ) -> None:
        """Initializes the MetricsCache.

        Args:
            search_path: Directory checked for ``<FontName>.afm`` before
                the packaged metrics. Ignored when ``loader`` is given.
            loader: Custom source of AFM data.
        """
        self._loader = loader if loader is not None else AfmLoader(search_path)
        self._cache: dict[str, FontMetrics] = {}
        self.parse_count = 0

    def get(self, font_name: str) -> FontMetrics:
        """Returns the metrics for a font, loading them on first use.

        Raises:
            MetricsNotFoundError: If no metrics exist for the font.
            MalformedMetricsError: If the metrics cannot be parsed.
        """
        metrics = self._cache.get(font_name)
        if metrics is None:
            data = self._loader.load(font_name)
            self.parse_count += 1
            metrics = parse_afm(data)
            self._cache[font_name] = metrics
            logger.debug("Cached metrics for %s", font_name)
        return metrics

    def __contains__(self, font_name: object) -> bool:
        return font_name in self._cache

    def __len__(self) -> int:
        return len(self._cache)
