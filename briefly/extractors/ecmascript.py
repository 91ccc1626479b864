"""Tree-sitter powered extractor for JavaScript, TypeScript and JSX sources."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from .base import Extraction, Extractor
from ..logging import get_logger
from ..models import (
    ClassRecord,
    CommentRecord,
    ExportRecord,
    ExtractOptions,
    FunctionRecord,
    ImportRecord,
    ImportSpecifier,
    MethodRecord,
    StructuralFacts,
    VariableRecord,
)

logger = get_logger("extractors.ecmascript")

_GRAMMARS: Dict[str, Callable[[], object]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_LANGUAGE_BY_EXTENSION = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
}

ECMASCRIPT_EXTENSIONS = frozenset(_LANGUAGE_BY_EXTENSION)

_FUNCTION_DECLARATIONS = {"function_declaration", "generator_function_declaration"}
_FUNCTION_EXPRESSIONS = {"arrow_function", "function_expression", "function", "generator_function"}
_GENERATORS = {"generator_function_declaration", "generator_function"}
_CLASS_DECLARATIONS = {"class_declaration", "abstract_class_declaration"}
_VARIABLE_DECLARATIONS = {"lexical_declaration", "variable_declaration"}

Event = Union[
    ImportRecord,
    ExportRecord,
    FunctionRecord,
    ClassRecord,
    VariableRecord,
    CommentRecord,
]


class EcmaScriptExtractor(Extractor):
    """Walks a tree-sitter syntax tree and reduces it to structural facts."""

    def __init__(self) -> None:
        self._parsers: Dict[str, Parser] = {}

    def extract(self, content: str, extension: str, options: ExtractOptions) -> Extraction:
        language_key = _LANGUAGE_BY_EXTENSION.get(extension.lower(), "javascript")
        source_bytes = content.encode("utf-8", errors="replace")
        try:
            tree = self._get_parser(language_key).parse(source_bytes)
            error_node = _first_error(tree.root_node)
            if error_node is not None:
                return Extraction(
                    parse_error=_describe_error(error_node),
                    tree=tree if options.include_tree else None,
                )
            facts = reduce_events(collect_events(tree.root_node))
        except Exception as exc:  # pragma: no cover - defensive guard
            logger.debug("tree-sitter extraction failed: %s", exc)
            return Extraction(parse_error=str(exc) or exc.__class__.__name__)

        return Extraction(facts=facts, tree=tree if options.include_tree else None)

    def _get_parser(self, language_key: str) -> Parser:
        parser = self._parsers.get(language_key)
        if parser is not None:
            return parser
        language = Language(_GRAMMARS[language_key]())
        parser = Parser(language)
        self._parsers[language_key] = parser
        return parser


# ---------------------------------------------------------------------------
# Tree walk: node -> raw events
# ---------------------------------------------------------------------------


def collect_events(root: Node) -> List[Event]:
    """Return the syntax events of ``root`` in document order."""
    events: List[Event] = []
    for node in _walk(root):
        handler = _HANDLERS.get(node.type)
        if handler is not None:
            events.extend(handler(node))
    return events


def _walk(root: Node) -> Iterator[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _comment_events(node: Node) -> Iterable[Event]:
    text = _text(node)
    if text.startswith("/*"):
        body = text[2:-2] if text.endswith("*/") and len(text) >= 4 else text[2:]
        kind = "block"
    else:
        body = text[2:] if text.startswith("//") else text
        kind = "line"
    yield CommentRecord(kind=kind, text=body.strip(), start=node.start_byte, end=node.end_byte)


def _import_events(node: Node) -> Iterable[Event]:
    source_node = node.child_by_field_name("source")
    if source_node is None:
        source_node = _first_descendant(node, "string")
    if source_node is None:
        return
    specifiers: List[ImportSpecifier] = []
    for clause in node.named_children:
        if clause.type != "import_clause":
            continue
        for item in clause.named_children:
            if item.type == "identifier":
                specifiers.append(ImportSpecifier(kind="default", name=_text(item)))
            elif item.type == "namespace_import":
                local = _first_descendant(item, "identifier")
                if local is not None:
                    specifiers.append(ImportSpecifier(kind="namespace", name=_text(local)))
            elif item.type == "named_imports":
                for spec in item.named_children:
                    if spec.type != "import_specifier":
                        continue
                    imported_node = spec.child_by_field_name("name")
                    alias_node = spec.child_by_field_name("alias")
                    if imported_node is None:
                        continue
                    imported = _string_value(imported_node)
                    local = _text(alias_node) if alias_node is not None else imported
                    specifiers.append(
                        ImportSpecifier(kind="named", name=local, imported=imported)
                    )
    yield ImportRecord(
        source=_string_value(source_node),
        line=_line(node),
        specifiers=tuple(specifiers),
    )


def _export_events(node: Node) -> Iterable[Event]:
    line = _line(node)
    declaration = node.child_by_field_name("declaration")

    if any(child.type == "default" for child in node.children):
        target = declaration or node.child_by_field_name("value")
        name = "anonymous"
        if target is not None:
            if target.type == "identifier":
                name = _text(target)
            else:
                name_node = target.child_by_field_name("name")
                if name_node is not None:
                    name = _text(name_node)
        yield ExportRecord(kind="default", name=name, line=line)
        return

    if declaration is not None:
        if declaration.type in _FUNCTION_DECLARATIONS:
            yield ExportRecord(kind="function", name=_name_of(declaration), line=line)
        elif declaration.type in _CLASS_DECLARATIONS:
            yield ExportRecord(kind="class", name=_name_of(declaration), line=line)
        elif declaration.type in _VARIABLE_DECLARATIONS:
            for declarator in _declarators(declaration):
                name_node = declarator.child_by_field_name("name")
                if name_node is not None and name_node.type == "identifier":
                    yield ExportRecord(kind="variable", name=_text(name_node), line=line)

    for clause in node.named_children:
        if clause.type != "export_clause":
            continue
        for spec in clause.named_children:
            if spec.type != "export_specifier":
                continue
            exported = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
            if exported is not None:
                yield ExportRecord(kind="reexport", name=_string_value(exported), line=line)


def _function_events(node: Node) -> Iterable[Event]:
    yield FunctionRecord(
        name=_name_of(node),
        params=_param_names(node),
        line=_line(node),
        is_async=_has_token(node, "async"),
        is_generator=node.type in _GENERATORS,
    )


def _class_events(node: Node) -> Iterable[Event]:
    body = node.child_by_field_name("body")
    methods: Tuple[MethodRecord, ...] = ()
    if body is not None:
        methods = tuple(
            _method_record(member)
            for member in body.named_children
            if member.type == "method_definition"
        )
    yield ClassRecord(
        name=_name_of(node),
        line=_line(node),
        superclass=_superclass(node),
        methods=methods,
    )


def _declaration_events(node: Node) -> Iterable[Event]:
    kind_node = node.child_by_field_name("kind")
    if kind_node is not None:
        kind = _text(kind_node)
    elif node.type == "variable_declaration":
        kind = "var"
    else:
        kind = node.children[0].type if node.children else None
    line = _line(node)

    for declarator in _declarators(node):
        name_node = declarator.child_by_field_name("name")
        if name_node is None or name_node.type != "identifier":
            continue
        name = _text(name_node)
        value = declarator.child_by_field_name("value")
        if value is not None and value.type in _FUNCTION_EXPRESSIONS:
            yield FunctionRecord(
                name=name,
                params=_param_names(value),
                line=line,
                is_async=_has_token(value, "async"),
                is_generator=value.type in _GENERATORS,
                is_arrow=value.type == "arrow_function",
            )
        else:
            yield VariableRecord(name=name, line=line, kind=kind)


_HANDLERS: Dict[str, Callable[[Node], Iterable[Event]]] = {
    "comment": _comment_events,
    "import_statement": _import_events,
    "export_statement": _export_events,
    "function_declaration": _function_events,
    "generator_function_declaration": _function_events,
    "class_declaration": _class_events,
    "abstract_class_declaration": _class_events,
    "lexical_declaration": _declaration_events,
    "variable_declaration": _declaration_events,
}


# ---------------------------------------------------------------------------
# Reduction: raw events -> facts
# ---------------------------------------------------------------------------


def reduce_events(events: Sequence[Event]) -> StructuralFacts:
    """Fold syntax events into facts and derive the exported flags."""
    imports: List[ImportRecord] = []
    exports: List[ExportRecord] = []
    functions: List[FunctionRecord] = []
    classes: List[ClassRecord] = []
    variables: List[VariableRecord] = []
    comments: List[CommentRecord] = []

    for event in events:
        if isinstance(event, ImportRecord):
            imports.append(event)
        elif isinstance(event, ExportRecord):
            exports.append(event)
        elif isinstance(event, FunctionRecord):
            functions.append(event)
        elif isinstance(event, ClassRecord):
            classes.append(event)
        elif isinstance(event, VariableRecord):
            variables.append(event)
        elif isinstance(event, CommentRecord):
            comments.append(event)

    exported_names = {export.name for export in exports}
    return StructuralFacts(
        imports=tuple(imports),
        exports=tuple(exports),
        functions=tuple(replace(fn, exported=fn.name in exported_names) for fn in functions),
        classes=tuple(replace(cls, exported=cls.name in exported_names) for cls in classes),
        variables=tuple(variables),
        comments=tuple(comments),
    )


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------


def _text(node: Node) -> str:
    return (node.text or b"").decode("utf-8", errors="replace")


def _line(node: Node) -> int:
    return node.start_point[0] + 1


def _string_value(node: Node) -> str:
    text = _text(node)
    if node.type == "string" and len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    return text


def _name_of(node: Node) -> str:
    name_node = node.child_by_field_name("name")
    return _text(name_node) if name_node is not None else "anonymous"


def _has_token(node: Node, token: str) -> bool:
    return any(not child.is_named and child.type == token for child in node.children)


def _first_descendant(node: Node, node_type: str) -> Optional[Node]:
    for candidate in _walk(node):
        if candidate is not node and candidate.type == node_type:
            return candidate
    return None


def _declarators(node: Node) -> List[Node]:
    return [child for child in node.named_children if child.type == "variable_declarator"]


def _param_names(node: Node) -> Tuple[str, ...]:
    single = node.child_by_field_name("parameter")
    if single is not None:
        return (_param_name(single),)
    parameters = node.child_by_field_name("parameters")
    if parameters is None:
        return ()
    return tuple(
        _param_name(param) for param in parameters.named_children if param.type != "comment"
    )


def _param_name(node: Node) -> str:
    if node.type in {"required_parameter", "optional_parameter"}:
        pattern = node.child_by_field_name("pattern")
        if pattern is None:
            return "param"
        node = pattern
    if node.type == "identifier":
        return _text(node)
    if node.type == "assignment_pattern":
        left = node.child_by_field_name("left")
        if left is not None and left.type == "identifier":
            return _text(left)
    return "param"


def _superclass(node: Node) -> Optional[str]:
    heritage = next((child for child in node.children if child.type == "class_heritage"), None)
    if heritage is None:
        return None
    value: Optional[Node] = None
    extends_clause = next(
        (child for child in heritage.named_children if child.type == "extends_clause"), None
    )
    if extends_clause is not None:
        value = extends_clause.child_by_field_name("value")
        if value is None and extends_clause.named_children:
            value = extends_clause.named_children[0]
    elif heritage.named_children:
        first = heritage.named_children[0]
        if first.type != "implements_clause":
            value = first
    if value is not None and value.type == "identifier":
        return _text(value)
    return None


def _method_record(node: Node) -> MethodRecord:
    name_node = node.child_by_field_name("name")
    modifiers = set()
    for child in node.children:
        if name_node is not None and child.start_byte >= name_node.start_byte:
            break
        if not child.is_named:
            modifiers.add(child.type)
    name = _text(name_node) if name_node is not None else "anonymous"

    if "get" in modifiers:
        kind = "getter"
    elif "set" in modifiers:
        kind = "setter"
    elif name == "constructor":
        kind = "constructor"
    else:
        kind = "method"
    return MethodRecord(name=name, kind=kind, is_static="static" in modifiers)


def _first_error(root: Node) -> Optional[Node]:
    if not root.has_error:
        return None
    node = root
    while True:
        if node.type == "ERROR" or node.is_missing:
            return node
        child = next(
            (candidate for candidate in node.children if candidate.has_error or candidate.is_missing),
            None,
        )
        if child is None:
            return node
        node = child


def _describe_error(node: Node) -> str:
    row, column = node.start_point[0] + 1, node.start_point[1] + 1
    if node.is_missing:
        return f"Missing {node.type!r} at line {row}, column {column}"
    return f"Unexpected token at line {row}, column {column}"


__all__ = ["ECMASCRIPT_EXTENSIONS", "EcmaScriptExtractor", "collect_events", "reduce_events"]
