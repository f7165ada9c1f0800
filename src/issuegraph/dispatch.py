"""Format dispatch: picks the output format and routes to the right exporter.

Rendering is always completed in memory before anything touches the
filesystem, so configuration and empty-graph errors never leave a partial
file behind.
"""

import logging
import os
import tempfile
from collections.abc import Iterable, Sequence
from pathlib import Path

from .config import ExportConfig, GraphFormat
from .errors import ConfigurationError
from .graph import build_layout, create_exporter, filter_nodes
from .models.issue import Edge, Node
from .models.metrics import MetricsProvider
from .snapshot import SnapshotBackend, render_snapshot

logger = logging.getLogger(__name__)

EXTENSION_FORMATS: dict[str, GraphFormat] = {
    ".json": GraphFormat.JSON,
    ".dot": GraphFormat.DOT,
    ".gv": GraphFormat.DOT,
    ".mmd": GraphFormat.MERMAID,
    ".mermaid": GraphFormat.MERMAID,
    ".svg": GraphFormat.SVG,
    ".png": GraphFormat.PNG,
}

SUPPORTED_FORMATS = ", ".join(f.value for f in GraphFormat)


def parse_format(value: GraphFormat | str) -> GraphFormat:
    """Parse an explicit format name such as 'SVG' or '.png'."""
    if isinstance(value, GraphFormat):
        return value
    normalized = value.strip().lower().lstrip(".")
    try:
        return GraphFormat(normalized)
    except ValueError:
        raise ConfigurationError(f"unsupported format {value!r} (want {SUPPORTED_FORMATS})")


def resolve_output(path: str | Path | None, output_format: GraphFormat | str | None = None) -> tuple[GraphFormat, Path]:
    """Decide the output format and final path.

    An explicit format wins. Otherwise the format comes from the path's
    extension; a path without one becomes an SVG with '.svg' appended, and an
    unrecognized extension falls back to SVG unchanged.

    Raises:
        ConfigurationError: If the path is missing or the explicit format is unknown
    """
    if path is None or str(path) == "":
        raise ConfigurationError("output path is required")
    path = Path(path)

    if output_format:
        return parse_format(output_format), path

    suffix = path.suffix.lower()
    if not suffix:
        return GraphFormat.SVG, path.with_name(path.name + ".svg")
    return EXTENSION_FORMATS.get(suffix, GraphFormat.SVG), path


def render_graph(
    nodes: Sequence[Node],
    edges: Iterable[Edge | None],
    metrics: MetricsProvider | None,
    config: ExportConfig | None = None,
    output_format: GraphFormat | str | None = None,
) -> bytes:
    """Render the graph in memory.

    Args:
        nodes: All issues; the configured label/root/depth filters apply
        edges: Dependencies between issues
        metrics: Metrics provider (required for svg/png)
        config: Export settings
        output_format: Overrides ``config.format``

    Returns:
        Encoded output: UTF-8 text for json/dot/mermaid, SVG or PNG bytes

    Raises:
        ConfigurationError: If no format is known or it is unsupported
        MissingMetricsError: If a snapshot is requested without metrics
        EmptyGraphError: If a snapshot is requested and no issues remain
    """
    config = config or ExportConfig()
    chosen = output_format or config.format
    if not chosen:
        raise ConfigurationError("output format is required")
    fmt = parse_format(chosen)
    edges = list(edges)

    logger.debug(f"Rendering {len(nodes)} issues as {fmt.value}")

    if fmt.is_snapshot:
        filtered = filter_nodes(nodes, edges, label=config.label, root_id=config.root, max_depth=config.depth)
        layout = build_layout(
            filtered,
            edges,
            metrics,
            config.preset,
            title=config.title,
            data_hash=config.data_hash,
        )
        return render_snapshot(layout, SnapshotBackend(fmt.value))

    result = create_exporter(config).export(nodes, edges, metrics, fmt.value)
    if fmt == GraphFormat.JSON:
        return result.to_json().encode("utf-8")
    return (result.graph or "").encode("utf-8")


def write_graph(
    path: str | Path | None,
    nodes: Sequence[Node],
    edges: Iterable[Edge | None],
    metrics: MetricsProvider | None = None,
    config: ExportConfig | None = None,
) -> Path:
    """Render the graph and write it to ``path``.

    Returns:
        The path actually written (``.svg`` is appended to extension-less paths)
    """
    config = config or ExportConfig()
    fmt, out_path = resolve_output(path, config.format)
    data = render_graph(nodes, edges, metrics, config, fmt)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    # Written beside the target, then moved into place in one step
    tmp = tempfile.NamedTemporaryFile(dir=out_path.parent, prefix=f".{out_path.name}.", suffix=".tmp", delete=False)
    tmp_path = Path(tmp.name)
    try:
        with tmp:
            tmp.write(data)
        os.replace(tmp_path, out_path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.info(f"Wrote {fmt.value} graph ({len(data)} bytes) to {out_path}")
    return out_path
