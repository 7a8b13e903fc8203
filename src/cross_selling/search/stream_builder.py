"""Compiles saved product streams into concrete search filters."""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from ..data.entities import ProductStream, SalesChannelContext
from ..exceptions import NoStreamFilterError, StreamNotFoundError
from .criteria import Filter, filter_from_dict

log = logging.getLogger(__name__)


class ProductStreamBuilder:
    def __init__(self, streams: Sequence[ProductStream]) -> None:
        self._streams: Dict[str, ProductStream] = {stream.id: stream for stream in streams}

    def build_filters(self, stream_id: str, context: SalesChannelContext) -> List[Filter]:
        stream = self._streams.get(stream_id)
        if stream is None:
            raise StreamNotFoundError(stream_id)
        if not stream.filters:
            raise NoStreamFilterError(stream_id)

        filters = [filter_from_dict(raw) for raw in stream.filters]
        log.debug("Compiled %d filter(s) for product stream %s", len(filters), stream_id)
        return filters
