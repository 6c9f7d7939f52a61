"""
Sync driver — fetch → extract → render → write, once per call.

A TransportError from the Figma API aborts the run before anything is
extracted or written. Write failures are collected per destination so one
bad path does not stop the other formats from being written.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from .config import resolve_cache_path, resolve_file_key, resolve_output_paths, resolve_token
from .extractor import ExtractionReport, ExtractionResult, TokenExtractor
from .figma_reader import (
    FigmaAPIClient,
    TransportError,
    parse_node,
    parse_styles,
    parse_variables,
)
from .generator import FORMATS, render
from .tokens import TokenSet
from .writer import FingerprintCache, OutputWriter, SinkError


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class SyncResult:
    tokens: TokenSet
    report: ExtractionReport
    changed: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


class DesignTokenSync:
    """One-way Figma → code token sync."""

    def __init__(
        self,
        config: dict,
        client: Optional[FigmaAPIClient] = None,
        writer: Optional[OutputWriter] = None,
        clock: Optional[Callable[[], str]] = None,
        file_key: Optional[str] = None,
    ):
        self.config = config
        self.file_key = resolve_file_key(config, file_key)
        if not self.file_key:
            raise ValueError("Figma file key is required (figma.fileKey or FIGMA_FILE_KEY)")
        if client is None:
            token = resolve_token(config)
            if not token:
                raise ValueError("Figma access token is required (FIGMA_ACCESS_TOKEN or figma.personalAccessToken)")
            client = FigmaAPIClient(token)
        self.client = client
        self.writer = writer or OutputWriter()
        self.clock = clock or _utc_now
        self.extractor = TokenExtractor()

    def fetch_tokens(self) -> ExtractionResult:
        """Fetch the file, its styles and variables, and extract one TokenSet."""
        print(f"📥 Extracting tokens from Figma: {self.file_key}")
        file_data = self.client.get_file(self.file_key)
        raw_styles = self.client.get_file_styles(self.file_key)

        raw_variables = file_data.get("variables")
        if not raw_variables and (self.config.get("figma") or {}).get("variablesApi"):
            try:
                raw_variables = self.client.get_local_variables(self.file_key)
            except TransportError as e:
                print(f"   ⚠️  Variables API unavailable, continuing without variables: {e}")
                raw_variables = {}

        result = self.extractor.extract(
            parse_node(file_data.get("document") or {}),
            parse_styles(raw_styles),
            parse_variables(raw_variables if isinstance(raw_variables, dict) else {}),
            synced_at=self.clock(),
            file_key=self.file_key,
            file_name=file_data.get("name"),
        )
        counts = result.tokens.counts()
        print(f"   Found {counts['colors']} colors")
        print(f"   Found {counts['typography']} typography styles")
        print(f"   Found {counts['spacing']} spacing values" + (" (default scale)" if result.report.spacing_fallback else ""))
        print(f"   Found {counts['effects']} effects")
        if result.report.gaps:
            print(f"   ℹ️  Skipped {len(result.report.gaps)} styles/variables with no usable data")
        for collision in result.report.collisions:
            print(f"   ⚠️  {collision.category} key '{collision.key}': '{collision.replaced}' overwritten by '{collision.replaced_by}'")
        return result

    def sync(self, only: Optional[List[str]] = None) -> SyncResult:
        extraction = self.fetch_tokens()
        outputs = resolve_output_paths(self.config)
        if only:
            outputs = {fmt: dest for fmt, dest in outputs.items() if fmt in only}

        cache_path = resolve_cache_path(self.config)
        cache = FingerprintCache.load(cache_path)
        # 磁碟上的檔案內容優先於上次存下的指紋（手動修改或切換分支後會重寫）
        for dest in outputs.values():
            cache.seed_from_file(dest)

        result = SyncResult(tokens=extraction.tokens, report=extraction.report)
        print("\n🔄 Transforming tokens...")
        for fmt in FORMATS:
            dest = outputs.get(fmt)
            if not dest:
                continue
            content = render(fmt, extraction.tokens)
            try:
                written = self.writer.write(dest, content, cache)
            except SinkError as e:
                result.failed[dest] = str(e.cause)
                print(f"   ❌ {fmt} → {dest}: {e.cause}")
                continue
            if written.changed:
                result.changed.append(dest)
                print(f"   ✓ {fmt} → {dest}")
            else:
                result.unchanged.append(dest)
                print(f"   = {fmt} → {dest} (unchanged)")

        try:
            cache.save(cache_path)
        except SinkError as e:
            print(f"   ⚠️  Could not save fingerprint cache: {e.cause}")

        if result.ok:
            print(f"\n✅ Design token sync complete! ({len(result.changed)} changed, {len(result.unchanged)} unchanged)")
        else:
            print(f"\n❌ Sync finished with {len(result.failed)} failed outputs.")
        return result
