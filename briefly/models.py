"""Core data models shared across briefly components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class ImportSpecifier:
    """A single binding introduced by an import statement."""

    kind: str
    name: str
    imported: Optional[str] = None


@dataclass(frozen=True)
class ImportRecord:
    """Module imported by a source file."""

    source: str
    line: int
    specifiers: Tuple[ImportSpecifier, ...] = ()


@dataclass(frozen=True)
class ExportRecord:
    """Name exported by a source file."""

    kind: str
    name: str
    line: int


@dataclass(frozen=True)
class FunctionRecord:
    """Function declaration or function-valued binding."""

    name: str
    params: Tuple[str, ...]
    line: int
    is_async: bool = False
    is_generator: bool = False
    is_arrow: bool = False
    is_method: bool = False
    exported: bool = False


@dataclass(frozen=True)
class MethodRecord:
    """Method defined in a class body."""

    name: str
    kind: str
    is_static: bool = False


@dataclass(frozen=True)
class ClassRecord:
    """Class declaration with its direct methods."""

    name: str
    line: int
    superclass: Optional[str] = None
    methods: Tuple[MethodRecord, ...] = ()
    exported: bool = False


@dataclass(frozen=True)
class VariableRecord:
    """Variable binding that is not function-valued."""

    name: str
    line: int
    kind: Optional[str] = None


@dataclass(frozen=True)
class CommentRecord:
    """Comment captured while parsing, with its byte span."""

    kind: str
    text: str
    start: int
    end: int


@dataclass(frozen=True)
class JsonArrayShape:
    """Shape of a JSON array, described by its first item."""

    length: int
    items: Optional["JsonShape"] = None
    type: str = "array"


@dataclass(frozen=True)
class JsonObjectShape:
    """Shape of a JSON object, limited to its leading keys."""

    keys: Dict[str, "JsonShape"]
    remaining_keys: int = 0
    type: str = "object"


JsonShape = Union[str, JsonArrayShape, JsonObjectShape]


@dataclass(frozen=True)
class StructuralFacts:
    """Facts collected from one source file."""

    imports: Tuple[ImportRecord, ...] = ()
    exports: Tuple[ExportRecord, ...] = ()
    functions: Tuple[FunctionRecord, ...] = ()
    classes: Tuple[ClassRecord, ...] = ()
    variables: Tuple[VariableRecord, ...] = ()
    comments: Tuple[CommentRecord, ...] = ()


@dataclass(frozen=True)
class FileRecord:
    """Extraction result for a single file."""

    path: str
    name: str
    extension: str
    lines: int
    size: int
    imports: Tuple[ImportRecord, ...] = ()
    exports: Tuple[ExportRecord, ...] = ()
    functions: Tuple[FunctionRecord, ...] = ()
    classes: Tuple[ClassRecord, ...] = ()
    variables: Tuple[VariableRecord, ...] = ()
    comments: Tuple[CommentRecord, ...] = ()
    structure: Optional[JsonShape] = None
    parse_error: Optional[str] = None
    tree: Optional[Any] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class ExtractOptions:
    """Per-call extraction switches."""

    include_tree: bool = False


@dataclass
class ProjectStats:
    """Aggregate counts over the scanned file list."""

    total: int
    by_extension: Dict[str, int]
    by_directory: Dict[str, int]
    total_size: int


@dataclass
class DirectoryStructure:
    """Directories implied by the file list and the deepest path."""

    directories: List[str]
    depth: int


@dataclass
class DependencyInfo:
    """Dependencies declared by the first manifest that was found."""

    manager: Optional[str] = None
    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)


@dataclass
class ProjectFacts:
    """Project-level view handed to summarizers and renderers."""

    name: str
    root: str
    files: List[str]
    stats: ProjectStats
    categories: Dict[str, List[str]]
    structure: DirectoryStructure
    dependencies: DependencyInfo
    entry_points: List[str]
    tech_stack: List[str]
