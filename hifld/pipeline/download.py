"""
Download job: Resolver -> Fetcher -> Normalizer -> Writer.

Each stage hands a fresh collection to the next one; the run outcome is
returned as a RunReport and emitted once as the canonical run event.
"""

from pathlib import Path

import httpx
import structlog

from hifld.core.config import Settings
from hifld.core.exceptions import HIFLDError
from hifld.core.logging import emit_run_event, finalize_run_event, init_run_event
from hifld.pipeline.models import RunReport, StateSummary
from hifld.pipeline.normalizer import normalize_all
from hifld.pipeline.writer import StationWriter
from hifld.services.arcgis import (
    ArcGISClient,
    EndpointResolver,
    RecordFetcher,
    build_candidates,
)

logger = structlog.get_logger()


async def run_download(
    settings: Settings,
    output_dir: Path | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RunReport:
    """
    Download the fire stations dataset and write all data artifacts.

    Args:
        settings: Pipeline settings (endpoints, batch size, paths)
        output_dir: Override for ``settings.output_dir``
        transport: Optional httpx transport (used by tests)

    Returns:
        RunReport for the run

    Raises:
        NoEndpointAvailableError: no candidate resolved
        EmptyDatasetError: declared count was zero
    """
    log = logger.bind(component="DownloadJob")
    event = init_run_event("download")
    output_dir = Path(output_dir or settings.output_dir)

    candidates = build_candidates(
        settings.arcgis_base_url,
        settings.arcgis_service_names,
        settings.mirror_url,
    )

    try:
        async with httpx.AsyncClient(transport=transport, follow_redirects=True) as http:
            client = ArcGISClient(
                http,
                timeout=settings.request_timeout,
                user_agent=settings.user_agent,
            )

            # Phase 1: resolve endpoint
            endpoint = await EndpointResolver(client, candidates).resolve()

            # Phase 2: download batches
            fetcher = RecordFetcher(
                client,
                batch_size=settings.batch_size,
                batch_delay=settings.batch_delay,
            )
            result = await fetcher.fetch_all(endpoint)
    except HIFLDError as e:
        emit_run_event(finalize_run_event(event, "failed", error=e))
        raise

    # Phase 3: normalize
    log.info("Processing data", features=result.retrieved)
    records = normalize_all(result.features)

    # Phase 4: persist
    paths = StationWriter(output_dir).write(
        records,
        endpoint=result.endpoint,
        declared_total=result.declared_total,
    )

    errors = [result.error] if result.error else []
    errors.extend(f"write failed: {name}" for name in paths.failed)

    report = RunReport(
        endpoint=result.endpoint,
        declared_total=result.declared_total,
        retrieved=result.retrieved,
        batches_requested=result.batches_requested,
        stop_reason=result.stop_reason,
        summary=StateSummary.from_records(records),
        paths=paths,
        errors=errors,
    )

    emit_run_event(
        finalize_run_event(
            event,
            report.outcome,
            endpoint={
                "provider": report.endpoint.provider.value,
                "name": report.endpoint.identifier,
                "url": report.endpoint.base_url,
            },
            declared_total=report.declared_total,
            retrieved=report.retrieved,
            batches=report.batches_requested,
            stop_reason=report.stop_reason.value,
            states=len(report.summary.states),
            top_states={s.state: s.count for s in report.summary.top(5)},
            errors=report.errors,
        )
    )
    return report
