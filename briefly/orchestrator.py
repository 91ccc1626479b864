"""Pipeline orchestration for the summary, module and export commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .aggregator import ProjectAggregator
from .config import BrieflyConfig, load_config
from .extractors import extract_file
from .formatter import format_module_summary, format_project_summary
from .llm.runner import LLMRunner
from .logging import get_logger
from .markdown import FileDoc, generate_markdown_docs
from .models import ExtractOptions, FileRecord, ProjectFacts
from .output import write_output
from .scanner import DirectoryScanner
from .summarizer import MODULE, PROJECT, ModuleBundle, Summarizer

SUMMARY_DEPTH = 3
EXPORT_DEPTH = 5
EXPORT_OUTPUT = "SUMMARY.md"
EXPORT_EXTENSIONS = (".js", ".ts", ".jsx", ".tsx", ".py", ".rb", ".go")


@dataclass
class CommandOutcome:
    """Rendered text of a command and where it was written, if anywhere."""

    text: str
    output_path: Optional[Path] = None


@dataclass
class ExportOutcome:
    """Result of a Markdown export."""

    output_path: Path
    documented: int
    summarized: int


class Orchestrator:
    """Coordinates scanning, extraction, summarization and rendering."""

    def __init__(
        self,
        aggregator: ProjectAggregator | None = None,
        llm_runner: LLMRunner | None = None,
    ) -> None:
        self.aggregator = aggregator or ProjectAggregator()
        self.logger = get_logger("orchestrator")
        self._llm_runner = llm_runner

    def run_summary(
        self,
        path: str,
        *,
        depth: int | None = None,
        output: str | None = None,
        use_ai: bool = True,
    ) -> CommandOutcome:
        """Summarize the project rooted at ``path``."""
        root = Path(path).expanduser().resolve()
        config = load_config(root)
        if depth is None:
            depth = config.scan.max_depth if config.scan.max_depth is not None else SUMMARY_DEPTH
        facts = self._analyze(root, config, depth)

        summary = None
        summarizer = self._summarizer(config, use_ai)
        if summarizer is not None:
            summary = summarizer.summarize(facts, PROJECT)

        text = format_project_summary(facts, summary)
        return CommandOutcome(text=text, output_path=self._write(output, text))

    def run_module(
        self,
        path: str,
        *,
        output: str | None = None,
        show_tree: bool = False,
        use_ai: bool = True,
    ) -> CommandOutcome:
        """Describe a single source file."""
        file_path = Path(path).expanduser().resolve()
        content = file_path.read_text(encoding="utf-8", errors="replace")
        config = load_config(file_path.parent)
        record = extract_file(str(file_path), content, ExtractOptions(include_tree=show_tree))

        summary = None
        summarizer = self._summarizer(config, use_ai)
        if summarizer is not None:
            summary = summarizer.summarize(ModuleBundle(record=record, content=content), MODULE)

        text = format_module_summary(record, summary, show_tree=show_tree)
        return CommandOutcome(text=text, output_path=self._write(output, text))

    def run_export(
        self,
        path: str = ".",
        *,
        output: str = EXPORT_OUTPUT,
        include_code: bool = False,
        use_ai: bool = True,
    ) -> ExportOutcome:
        """Render the project Markdown report to ``output``."""
        root = Path(path).expanduser().resolve()
        config = load_config(root)
        facts = self._analyze(root, config, EXPORT_DEPTH)

        parsed = self._parse_code_files(facts.files, config.export.max_files)
        self.logger.debug("Parsed %d code files for export", len(parsed))

        project_summary = None
        summaries: List[Optional[str]] = [None] * len(parsed)
        summarizer = self._summarizer(config, use_ai)
        if summarizer is not None:
            project_summary = summarizer.summarize(facts, PROJECT)
            # Module summaries are skipped once the project summary has failed.
            if project_summary is not None:
                for index, (record, content) in enumerate(parsed[: config.export.max_summaries]):
                    summaries[index] = summarizer.summarize(
                        ModuleBundle(record=record, content=content), MODULE
                    )

        docs = [
            FileDoc(record=record, content=content, summary=summary)
            for (record, content), summary in zip(parsed, summaries)
        ]
        markdown = generate_markdown_docs(
            facts,
            project_summary=project_summary,
            files=docs,
            include_code=include_code,
        )
        target = write_output(output, markdown)
        self.logger.info("Documentation exported to %s", target)
        return ExportOutcome(
            output_path=target,
            documented=len(docs),
            summarized=sum(1 for summary in summaries if summary),
        )

    def _analyze(self, root: Path, config: BrieflyConfig, depth: int) -> ProjectFacts:
        scanner = DirectoryScanner(max_depth=depth, ignore=config.scan.exclude_paths)
        files = scanner.scan(root)
        self.logger.debug("Scanner discovered %d files under %s", len(files), root)
        return self.aggregator.aggregate(root, files)

    def _parse_code_files(self, files: Sequence[str], limit: int) -> List[tuple[FileRecord, str]]:
        parsed: List[tuple[FileRecord, str]] = []
        for file in [path for path in files if path.endswith(EXPORT_EXTENSIONS)][:limit]:
            try:
                content = Path(file).read_text(encoding="utf-8", errors="replace")
            except OSError as exc:
                self.logger.debug("Skipping unreadable file %s: %s", file, exc)
                continue
            parsed.append((extract_file(file, content), content))
        return parsed

    def _summarizer(self, config: BrieflyConfig, use_ai: bool) -> Summarizer | None:
        if not use_ai or not config.summarizer.enabled:
            return None
        runner = self._resolve_llm_runner(config)
        return Summarizer(runner)

    def _resolve_llm_runner(self, config: BrieflyConfig) -> LLMRunner:
        if self._llm_runner is not None:
            return self._llm_runner

        llm_cfg = config.summarizer
        kwargs: dict[str, object] = {"model": llm_cfg.model}
        if llm_cfg.base_url:
            kwargs["base_url"] = llm_cfg.base_url
        if llm_cfg.api_key:
            kwargs["api_key"] = llm_cfg.api_key
        if llm_cfg.temperature is not None:
            kwargs["temperature"] = llm_cfg.temperature
        if llm_cfg.max_tokens is not None:
            kwargs["max_tokens"] = llm_cfg.max_tokens
        if llm_cfg.request_timeout is not None:
            kwargs["request_timeout"] = llm_cfg.request_timeout
        self._llm_runner = LLMRunner(**kwargs)  # type: ignore[arg-type]
        return self._llm_runner

    @staticmethod
    def _write(output: str | None, text: str) -> Optional[Path]:
        if not output:
            return None
        return write_output(output, text)


__all__ = ["CommandOutcome", "ExportOutcome", "Orchestrator"]
