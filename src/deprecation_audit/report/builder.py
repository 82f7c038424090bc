"""Markdown report of debug-only deprecations, grouped by deprecation id."""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional
from urllib.parse import quote

from ..analyzer.call_sites import DeprecationEntry

# Same unreserved set as JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class RepositoryLinks:
    """Static coordinates of the scanned repository on a code host."""
    host: str
    org: str
    repo: str
    ref: str
    base_dir: str

    def url_for(self, filename: str, line: Optional[int]) -> str:
        """Deep link to a line of ``filename`` (relative to ``base_dir``)."""
        encoded = quote(filename, safe=_URI_COMPONENT_SAFE)
        return (
            f"https://{self.host}/{self.org}/{self.repo}/blob/{self.ref}/"
            f"{self.base_dir}/{encoded}#L{format_line(line)}"
        )


def format_line(line: Optional[int]) -> str:
    return '' if line is None else str(line)


def group_by_id(entries: Iterable[DeprecationEntry]) -> Dict[str, List[DeprecationEntry]]:
    """Bucket entries by id, keeping scan order inside each bucket."""
    grouped: Dict[str, List[DeprecationEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.id, []).append(entry)
    return grouped


def render_entry(entry: DeprecationEntry, links: RepositoryLinks) -> str:
    return (
        f"## `{entry.filename}:{format_line(entry.line)}`\n\n"
        f"{links.url_for(entry.filename, entry.line)}\n\n"
        "```ts\n"
        f"{entry.code}\n"
        "```\n\n"
    )


def build_report(entries: Iterable[DeprecationEntry], links: RepositoryLinks) -> str:
    """Render the report document.

    Ids are emitted in sorted order. Only ``debug`` entries are printed, and
    an id whose entries are all non-debug gets no heading at all.

    Args:
        entries: Entries from all scanned files, in scan order
        links: Repository coordinates for deep links

    Returns:
        Markdown text
    """
    grouped = group_by_id(entries)
    parts = []

    for deprecation_id in sorted(grouped):
        heading_written = False
        for entry in grouped[deprecation_id]:
            if not entry.debug:
                continue
            if not heading_written:
                parts.append(f"# {deprecation_id}\n\n")
                heading_written = True
            parts.append(render_entry(entry, links))

    return ''.join(parts)


def write_report(report: str, output_path: str | Path) -> Path:
    """Write the rendered report as UTF-8 and return its path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8', newline='\n') as f:
        f.write(report)
    return output_path
