"""Export Scanner.

This module finds the Go functions a DLL should export by reading the
`//export Name` markers cgo uses.

Scanning Process:
    1. Parse each source file with the tree-sitter Go grammar
    2. Group consecutive top-level line comments (no blank line between them)
    3. Keep groups that end on the line directly above a top-level
       declaration (the declaration's doc comment)
    4. Normalize the group text the way go/ast CommentGroup.Text does
    5. A text beginning with "export " names one export

Leniency:
    Files that cannot be read, whose syntax tree contains errors, or that do
    not open with a package clause are skipped with a warning. The rest of the file set is still scanned.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import tree_sitter_go
from tree_sitter import Language, Node, Parser

logger = logging.getLogger(__name__)

EXPORT_KEYWORD = "export "

GO_LANGUAGE = Language(tree_sitter_go.language())

# Top-level nodes that can carry a doc comment
_DECLARATION_TYPES = frozenset(
    {
        "import_declaration",
        "const_declaration",
        "var_declaration",
        "type_declaration",
        "function_declaration",
        "method_declaration",
    }
)

# Compiler directives such as //go:noinline or //line file.go:10
_DIRECTIVE = re.compile(r"^(line |extern |[a-z0-9]+:[a-z0-9])")


class ExportScanner:
    """Extracts exported function names from Go source files."""

    def __init__(self) -> None:
        self._parser = Parser(GO_LANGUAGE)
        self.skipped_files: List[Path] = []

    def scan(self, files: Iterable[str | Path]) -> List[str]:
        """Collect export names from every file, in file order.

        Args:
            files: Source file paths in command-line order

        Returns:
            Export names in discovery order; duplicates are kept
        """
        exports: List[str] = []
        for file in files:
            found = self.scan_file(Path(file))
            if found is None:
                continue
            exports.extend(found)
        return exports

    def scan_file(self, path: Path) -> Optional[List[str]]:
        """Collect export names from a single file.

        Returns:
            Export names in source order, or None if the file was skipped
        """
        try:
            source = path.read_bytes()
        except OSError as e:
            logger.warning(f"Skipping {path}: {e}")
            self.skipped_files.append(path)
            return None

        tree = self._parser.parse(source)
        if tree.root_node.has_error:
            logger.warning(f"Skipping {path}: syntax errors")
            self.skipped_files.append(path)
            return None
        if not starts_with_package_clause(tree.root_node):
            logger.warning(f"Skipping {path}: no package clause")
            self.skipped_files.append(path)
            return None

        exports = [name for name in map(export_name, doc_comment_texts(tree.root_node)) if name is not None]
        logger.debug(f"{path}: {len(exports)} export(s)")
        return exports


def starts_with_package_clause(root: Node) -> bool:
    """Return True if the first non-comment top-level node is the package clause."""
    for node in root.named_children:
        if node.type != "comment":
            return node.type == "package_clause"
    return False


def doc_comment_texts(root: Node) -> List[str]:
    """Return the normalized doc comment text of each top-level declaration."""
    texts: List[str] = []
    group: List[Node] = []
    previous_end_row = -1

    for node in root.named_children:
        if node.type == "comment":
            # A comment trailing the previous declaration on its last line
            if not group and node.start_point[0] == previous_end_row:
                continue
            if group and node.start_point[0] > group[-1].end_point[0] + 1:
                group = []
            group.append(node)
            continue

        if group and node.type in _DECLARATION_TYPES and node.start_point[0] == group[-1].end_point[0] + 1:
            texts.append(comment_group_text([_node_text(c) for c in group]))
        group = []
        previous_end_row = node.end_point[0]

    return texts


def comment_group_text(comments: Sequence[str]) -> str:
    """Return the text of a comment group with comment markers removed.

    Mirrors go/ast CommentGroup.Text: "//", "/*" and "*/" are stripped, as is
    the first space of a line comment; directive lines are dropped; leading
    and trailing blank lines are removed and runs of blank lines collapse to
    one.

    Unlike go/ast, "//export" lines are kept, since they are what we look for.
    """
    lines: List[str] = []
    for comment in comments:
        if comment.startswith("//"):
            body = comment[2:]
            if _DIRECTIVE.match(body):
                continue
            if body.startswith(" "):
                body = body[1:]
            lines.append(body)
        elif comment.startswith("/*"):
            lines.extend(comment[2:-2].split("\n"))

    stripped = [line.rstrip() for line in lines]

    result: List[str] = []
    for line in stripped:
        if line == "" and (not result or result[-1] == ""):
            continue
        result.append(line)
    while result and result[-1] == "":
        result.pop()

    if not result:
        return ""
    return "\n".join(result) + "\n"


def export_name(text: str) -> Optional[str]:
    """Return the export name if text begins with the export marker.

    The remainder of the first line is trimmed and returned as-is; it is not
    validated as an identifier and may be empty.
    """
    if not text.startswith(EXPORT_KEYWORD):
        return None
    first_line = text[len(EXPORT_KEYWORD) :].split("\n", 1)[0]
    return first_line.strip()


def _node_text(node: Node) -> str:
    text = node.text or b""
    return text.decode("utf-8", errors="replace").replace("\r\n", "\n")
