"""
ArcGIS Module - Record Fetcher.

Downloads every feature of a resolved layer in fixed-size batches:
1. Count-only query for the declared total (zero is fatal)
2. Sequential offset/limit pages, one request in flight at a time
3. Stop early on a provider error, a failed request or an empty page,
   keeping everything retrieved so far

There is no retry: a failed batch ends paging for this run.
"""

import asyncio
from collections.abc import AsyncIterator

import httpx
import structlog

from hifld.core.exceptions import BatchFetchError, EmptyDatasetError, MalformedResponseError
from hifld.services.arcgis.client import ArcGISClient, parse_features, provider_error
from hifld.services.arcgis.models import (
    FetchProgress,
    FetchResult,
    RawFeature,
    ServiceEndpoint,
    StopReason,
)

logger = structlog.get_logger()

BATCH_SIZE = 2000  # ArcGIS maxRecordCount for this layer
BATCH_DELAY = 0.5


class RecordFetcher:
    """Sequential batch downloader for a single feature layer."""

    def __init__(
        self,
        client: ArcGISClient,
        batch_size: int = BATCH_SIZE,
        batch_delay: float = BATCH_DELAY,
    ):
        """
        Args:
            client: ArcGIS client used for count and page queries
            batch_size: Records per page request
            batch_delay: Courtesy pause between pages in seconds
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.client = client
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.log = logger.bind(component="RecordFetcher")

    async def fetch_count(self, endpoint: ServiceEndpoint) -> int:
        """
        Get the declared record count.

        Raises:
            EmptyDatasetError: count is zero, missing, or the query failed
        """
        try:
            payload = await self.client.fetch_count(endpoint)
        except (httpx.HTTPError, MalformedResponseError) as e:
            raise EmptyDatasetError(endpoint.base_url, f"count query failed: {e}") from e

        error = provider_error(payload)
        if error:
            raise EmptyDatasetError(endpoint.base_url, f"count query error: {error}")

        try:
            count = int(payload.get("count") or 0)
        except (TypeError, ValueError):
            count = 0

        if count <= 0:
            raise EmptyDatasetError(endpoint.base_url)

        self.log.info("Got record count", total=count)
        return count

    async def fetch_batch(self, endpoint: ServiceEndpoint, offset: int) -> list[RawFeature]:
        """
        Fetch one page.

        Raises:
            BatchFetchError: provider error payload
            MalformedResponseError: body was not a JSON object, or features
                had the wrong structure
            httpx.HTTPError: transport failure or timeout
        """
        payload = await self.client.fetch_page(endpoint, offset, self.batch_size)
        error = provider_error(payload)
        if error:
            raise BatchFetchError(offset, error)
        return parse_features(payload, endpoint.query_url)

    async def iter_batches(
        self,
        endpoint: ServiceEndpoint,
        progress: FetchProgress,
        start_offset: int = 0,
    ) -> AsyncIterator[list[RawFeature]]:
        """
        Lazily yield batches in offset order.

        Paging can be restarted from any batch boundary via ``start_offset``.
        The outcome (batches issued, stop reason) is recorded on ``progress``;
        this generator never raises for a failed batch.
        """
        total = progress.declared_total
        offset = start_offset
        total_batches = -(-total // self.batch_size)

        while offset < total:
            batch_num = offset // self.batch_size + 1
            log = self.log.bind(batch=f"{batch_num}/{total_batches}", offset=offset)

            progress.batches_requested += 1
            progress.offsets.append(offset)
            try:
                features = await self.fetch_batch(endpoint, offset)
            except BatchFetchError as e:
                log.error("Provider error, stopping", error=e.reason)
                progress.stop_reason = StopReason.PROVIDER_ERROR
                progress.error = e.reason
                return
            except httpx.TimeoutException:
                log.error("Batch timed out, stopping")
                progress.stop_reason = StopReason.REQUEST_FAILED
                progress.error = "timeout"
                return
            except (httpx.HTTPError, MalformedResponseError) as e:
                log.error("Batch request failed, stopping", error=str(e))
                progress.stop_reason = StopReason.REQUEST_FAILED
                progress.error = str(e)
                return

            if not features:
                # Treated as end-of-data even if fewer than `total` arrived
                log.warning("No features in response, stopping", retrieved=progress.retrieved)
                progress.stop_reason = StopReason.EMPTY_BATCH
                return

            progress.retrieved += len(features)
            log.info("Retrieved batch", count=len(features))
            yield features

            offset += self.batch_size
            if offset < total and self.batch_delay > 0:
                await asyncio.sleep(self.batch_delay)

        progress.stop_reason = StopReason.COMPLETE

    async def fetch_all(self, endpoint: ServiceEndpoint) -> FetchResult:
        """
        Download every reachable feature of ``endpoint``.

        Raises:
            EmptyDatasetError: declared count is zero
        """
        total = await self.fetch_count(endpoint)
        progress = FetchProgress(declared_total=total)

        features: list[RawFeature] = []
        async for batch in self.iter_batches(endpoint, progress):
            features.extend(batch)

        result = FetchResult(
            endpoint=endpoint,
            features=tuple(features),
            declared_total=total,
            batches_requested=progress.batches_requested,
            stop_reason=progress.stop_reason or StopReason.COMPLETE,
            error=progress.error,
        )
        self.log.info(
            "Download finished",
            retrieved=result.retrieved,
            declared=total,
            batches=result.batches_requested,
            stop_reason=result.stop_reason.value,
        )
        return result
