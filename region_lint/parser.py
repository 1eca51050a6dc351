# Standard Library
import bisect
import re

# Local modules
import region_lint.syntax


ATTRIBUTE_RX = re.compile(r"^\[[^\[\]]*(?:\[[^\[\]]*\][^\[\]]*)*\]\s*")
NAMESPACE_RX = re.compile(r"\bnamespace\s+@?[A-Za-z_]")
TYPE_DECLARATION_RX = re.compile(r"\b(?:class|struct|interface|enum|record)\s+@?[A-Za-z_]")
WHERE_RX = re.compile(r"\bwhere\b")
# tuple type followed by a member name, array rank, nullable mark or generic delimiter
TUPLE_TYPE_RX = re.compile(r"\((?:[^()]|\([^()]*\))*\)\??(?=\s*[\[>,]|\s+(?!where\b)@?[A-Za-z_])")
LAMBDA_RX = re.compile(r"(?:=>|\bdelegate\s*(?:\([^()]*\))?)$")
ASSIGNMENT_RX = re.compile(r"(?<![=!<>])=(?!=)")
ACCESSOR_RX = re.compile(r"\b(?:get|set|init|add|remove)$")
STATEMENT_KEYWORD_RX = re.compile(
	r"^(?:else\s+)?(if|for|foreach|while|do|try|catch|finally|else|using|lock|fixed"
	r"|checked|unchecked|unsafe|switch)\b"
)
SWITCH_EXPRESSION_RX = re.compile(r"\bswitch$")
INITIALIZER_RX = re.compile(r"\bnew\b|^(?:return|yield\s+return|throw|await)\b|(?<![=!<>])=$|\bwith$")
LOCAL_FUNCTION_RX = re.compile(
	r"^(?:[A-Za-z_][\w.<>\[\],?]*\s+)+@?[A-Za-z_]\w*\s*(?:<[^()]*>)?\s*\(.*\)(?:\s*where\b.*)?$",
	re.DOTALL,
)
STRING_START_RX = re.compile(r'(?:\$+@?|@\$*)?"')
DIRECTIVE_RX = re.compile(r"#\s*([A-Za-z]+)[ \t]*([^\r\n]*)")
TRAILING_COMMENT_RX = re.compile(r"\s*//.*$")

STATEMENT_KINDS = {
	"if": region_lint.syntax.IF_STATEMENT,
	"else": region_lint.syntax.ELSE_CLAUSE,
	"for": region_lint.syntax.FOR_STATEMENT,
	"foreach": region_lint.syntax.FOREACH_STATEMENT,
	"while": region_lint.syntax.WHILE_STATEMENT,
	"do": region_lint.syntax.DO_STATEMENT,
	"try": region_lint.syntax.TRY_STATEMENT,
	"catch": region_lint.syntax.CATCH_CLAUSE,
	"finally": region_lint.syntax.FINALLY_CLAUSE,
	"using": region_lint.syntax.USING_STATEMENT,
	"lock": region_lint.syntax.LOCK_STATEMENT,
	"fixed": region_lint.syntax.FIXED_STATEMENT,
	"checked": region_lint.syntax.CHECKED_STATEMENT,
	"unchecked": region_lint.syntax.CHECKED_STATEMENT,
	"unsafe": region_lint.syntax.UNSAFE_STATEMENT,
	"switch": region_lint.syntax.SWITCH_STATEMENT,
}

DIRECTIVE_KINDS_BY_KEYWORD = {
	"region": region_lint.syntax.REGION_DIRECTIVE,
	"endregion": region_lint.syntax.END_REGION_DIRECTIVE,
	"if": region_lint.syntax.IF_DIRECTIVE,
	"elif": region_lint.syntax.ELIF_DIRECTIVE,
	"else": region_lint.syntax.ELSE_DIRECTIVE,
	"endif": region_lint.syntax.END_IF_DIRECTIVE,
}

MEMBER_CONTEXT_KINDS = {
	region_lint.syntax.COMPILATION_UNIT,
	region_lint.syntax.NAMESPACE_DECLARATION,
	region_lint.syntax.TYPE_DECLARATION,
	region_lint.syntax.PROPERTY_DECLARATION,
}

EXPRESSION_CONTEXT_KINDS = {
	region_lint.syntax.INITIALIZER_EXPRESSION,
	region_lint.syntax.SWITCH_EXPRESSION,
}

# Owner kinds whose braces enclose a Block child.
BLOCK_BODIED_KINDS = {
	region_lint.syntax.METHOD_DECLARATION,
	region_lint.syntax.ACCESSOR_DECLARATION,
	region_lint.syntax.LOCAL_FUNCTION_STATEMENT,
	region_lint.syntax.LAMBDA_EXPRESSION,
	region_lint.syntax.IF_STATEMENT,
	region_lint.syntax.ELSE_CLAUSE,
	region_lint.syntax.FOR_STATEMENT,
	region_lint.syntax.FOREACH_STATEMENT,
	region_lint.syntax.WHILE_STATEMENT,
	region_lint.syntax.DO_STATEMENT,
	region_lint.syntax.TRY_STATEMENT,
	region_lint.syntax.CATCH_CLAUSE,
	region_lint.syntax.FINALLY_CLAUSE,
	region_lint.syntax.USING_STATEMENT,
	region_lint.syntax.LOCK_STATEMENT,
	region_lint.syntax.FIXED_STATEMENT,
	region_lint.syntax.CHECKED_STATEMENT,
	region_lint.syntax.UNSAFE_STATEMENT,
}


#============================================


def build_newline_index(text: str) -> list[int]:
	"""
	Return sorted positions of "\n" characters.

	Args:
		text: Input text.

	Returns:
		list[int]: Sorted newline positions.
	"""
	newlines: list[int] = []
	pos = text.find("\n")
	while pos != -1:
		newlines.append(pos)
		pos = text.find("\n", pos + 1)
	return newlines


#============================================


def pos_to_line(newlines: list[int], pos: int) -> int:
	"""
	Map a character offset to a 1-based line number using a newline index.
	"""
	return bisect.bisect_left(newlines, pos) + 1


#============================================


def _skip_char_literal(text: str, pos: int) -> int:
	"""
	Return the offset just past a character literal starting at pos.
	"""
	pos += 1
	while pos < len(text):
		ch = text[pos]
		if ch == "\\":
			pos += 2
			continue
		if ch == "'":
			return pos + 1
		if ch == "\n":
			return pos
		pos += 1
	return pos


#============================================


def _skip_string(text: str, pos: int) -> int:
	"""
	Return the offset just past a string literal starting at pos.

	Handles regular, verbatim, interpolated and raw literals. Interpolation
	holes are scanned for nested literals so their quotes and braces do not
	end the outer literal early. An unterminated regular literal stops at
	the end of its line.

	Args:
		text: Source text.
		pos: Offset of the literal prefix or opening quote.

	Returns:
		int: Offset after the closing quote.
	"""
	interpolated = False
	verbatim = False
	while text[pos] in "$@":
		if text[pos] == "$":
			interpolated = True
		else:
			verbatim = True
		pos += 1

	if text.startswith('"""', pos):
		fence_end = pos
		while fence_end < len(text) and text[fence_end] == '"':
			fence_end += 1
		fence = text[pos:fence_end]
		close = text.find(fence, fence_end)
		if close == -1:
			return len(text)
		return close + len(fence)

	pos += 1
	depth = 0
	while pos < len(text):
		ch = text[pos]
		if depth > 0:
			if STRING_START_RX.match(text, pos):
				pos = _skip_string(text, pos)
				continue
			if ch == "'":
				pos = _skip_char_literal(text, pos)
				continue
			if ch == "{":
				depth += 1
			elif ch == "}":
				depth -= 1
			pos += 1
			continue
		if interpolated and ch == "{":
			if text.startswith("{{", pos):
				pos += 2
				continue
			depth = 1
			pos += 1
			continue
		if ch == "\\" and not verbatim:
			pos += 2
			continue
		if ch == '"':
			if verbatim and text.startswith('""', pos):
				pos += 2
				continue
			return pos + 1
		if ch == "\n" and not verbatim:
			return pos
		pos += 1
	return pos


#============================================


def _normalize_header(header_chars: list[str]) -> str:
	"""
	Collapse whitespace and drop leading attribute lists from a header.
	"""
	header = " ".join("".join(header_chars).split())
	match = ATTRIBUTE_RX.match(header)
	while match:
		header = header[match.end():]
		match = ATTRIBUTE_RX.match(header)
	return header


#============================================


def _classify_member(context_kind: str, header: str) -> str:
	"""
	Classify a brace header found among namespace or type members.
	"""
	if context_kind == region_lint.syntax.PROPERTY_DECLARATION:
		if ACCESSOR_RX.search(header):
			return region_lint.syntax.ACCESSOR_DECLARATION
	if NAMESPACE_RX.search(header):
		return region_lint.syntax.NAMESPACE_DECLARATION
	# constraint clauses name "class"/"struct" without declaring a type
	declaration = WHERE_RX.split(header, 1)[0]
	if TYPE_DECLARATION_RX.search(declaration):
		return region_lint.syntax.TYPE_DECLARATION
	if LAMBDA_RX.search(header):
		return region_lint.syntax.LAMBDA_EXPRESSION
	# expression-bodied member: braces belong to the expression
	if "=>" in header:
		return region_lint.syntax.INITIALIZER_EXPRESSION
	signature = TUPLE_TYPE_RX.sub("", header)
	before_params = signature.split("(", 1)[0]
	if ASSIGNMENT_RX.search(before_params):
		return region_lint.syntax.INITIALIZER_EXPRESSION
	if "(" in signature:
		return region_lint.syntax.METHOD_DECLARATION
	return region_lint.syntax.PROPERTY_DECLARATION


#============================================


def _classify_statement(header: str) -> str:
	"""
	Classify a brace header found among statements.
	"""
	if LAMBDA_RX.search(header):
		return region_lint.syntax.LAMBDA_EXPRESSION
	match = STATEMENT_KEYWORD_RX.match(header)
	if match:
		return STATEMENT_KINDS[match.group(1)]
	if SWITCH_EXPRESSION_RX.search(header):
		return region_lint.syntax.SWITCH_EXPRESSION
	if INITIALIZER_RX.search(header):
		return region_lint.syntax.INITIALIZER_EXPRESSION
	if LOCAL_FUNCTION_RX.match(header):
		return region_lint.syntax.LOCAL_FUNCTION_STATEMENT
	return region_lint.syntax.BLOCK


#============================================


def classify_header(context_kind: str, header: str) -> str:
	"""
	Pick the node kind opened by a "{" from the text that precedes it.

	Args:
		context_kind: Kind of the innermost open node.
		header: Normalized code text since the previous ";", "{" or "}".

	Returns:
		str: Node kind for the owner of the braces.
	"""
	if context_kind in MEMBER_CONTEXT_KINDS:
		return _classify_member(context_kind, header)
	if context_kind in EXPRESSION_CONTEXT_KINDS:
		if LAMBDA_RX.search(header):
			return region_lint.syntax.LAMBDA_EXPRESSION
		return region_lint.syntax.INITIALIZER_EXPRESSION
	return _classify_statement(header)


#============================================


def _add_directive(
	parent: region_lint.syntax.SyntaxNode,
	directive_text: str,
	pos: int,
	newlines: list[int],
) -> region_lint.syntax.SyntaxNode:
	"""
	Attach a preprocessor directive node to its owning node.
	"""
	kind = region_lint.syntax.OTHER_DIRECTIVE
	name = directive_text[1:].strip()
	match = DIRECTIVE_RX.match(directive_text)
	if match:
		keyword = match.group(1)
		name = match.group(2).strip()
		if keyword in DIRECTIVE_KINDS_BY_KEYWORD:
			kind = DIRECTIVE_KINDS_BY_KEYWORD[keyword]
		else:
			name = f"{keyword} {name}".strip()
	name = TRAILING_COMMENT_RX.sub("", name)
	line = pos_to_line(newlines, pos)
	return region_lint.syntax.SyntaxNode(kind, start=pos, line=line, name=name, parent=parent)


#============================================


def _attach_directives(
	parent: region_lint.syntax.SyntaxNode,
	pending: list[tuple[int, int]],
	text: str,
	newlines: list[int],
) -> None:
	"""
	Attach directives waiting for their following token, then clear them.

	Args:
		parent: Node that owns the following token.
		pending: (start, end) offsets of directive lines.
		text: Source text.
		newlines: Newline index for text.
	"""
	for start, end in pending:
		_add_directive(parent, text[start:end], start, newlines)
	pending.clear()


#============================================


def parse_text(text: str, newlines: list[int] | None = None) -> region_lint.syntax.SyntaxNode:
	"""
	Build a syntax tree from C# source text.

	Only the brace structure is recovered: each "{" opens a node classified
	from its header, and block-bodied constructs get a Block child.
	Preprocessor directives are trivia of the next token: they become
	children of the node owning that token, so a directive just before a
	body's "{" lands in the body. Comments and literals are skipped so
	their braces are ignored.

	Args:
		text: Full file contents.
		newlines: Optional newline index for text.

	Returns:
		SyntaxNode: CompilationUnit root.
	"""
	if newlines is None:
		newlines = build_newline_index(text)

	root = region_lint.syntax.SyntaxNode(region_lint.syntax.COMPILATION_UNIT)
	stack: list[region_lint.syntax.SyntaxNode] = [root]
	# saved paren depth of each enclosing level, so for(;;) headers survive ";"
	saved_depths: list[int] = []
	paren_depth = 0
	header_chars: list[str] = []
	header_start: int | None = None
	pending: list[tuple[int, int]] = []
	at_line_start = True

	pos = 0
	while pos < len(text):
		ch = text[pos]

		if ch == "\n":
			at_line_start = True
			header_chars.append(" ")
			pos += 1
			continue
		if ch.isspace():
			header_chars.append(" ")
			pos += 1
			continue

		if at_line_start and ch == "#":
			end = text.find("\n", pos)
			if end == -1:
				end = len(text)
			pending.append((pos, end))
			pos = end
			continue
		at_line_start = False

		if text.startswith("//", pos):
			end = text.find("\n", pos)
			pos = len(text) if end == -1 else end
			continue
		if text.startswith("/*", pos):
			end = text.find("*/", pos + 2)
			pos = len(text) if end == -1 else end + 2
			header_chars.append(" ")
			continue

		if pending and ch != "{":
			_attach_directives(stack[-1], pending, text, newlines)

		if STRING_START_RX.match(text, pos):
			if header_start is None:
				header_start = pos
			pos = _skip_string(text, pos)
			header_chars.append('""')
			continue
		if ch == "'":
			if header_start is None:
				header_start = pos
			pos = _skip_char_literal(text, pos)
			header_chars.append("''")
			continue

		if ch == "{":
			parent = stack[-1]
			header = _normalize_header(header_chars)
			kind = classify_header(parent.kind, header)
			owner_start = pos if header_start is None else header_start
			owner = region_lint.syntax.SyntaxNode(
				kind,
				start=owner_start,
				line=pos_to_line(newlines, owner_start),
				name=header,
				parent=parent,
			)
			content = owner
			if kind in BLOCK_BODIED_KINDS:
				content = region_lint.syntax.SyntaxNode(
					region_lint.syntax.BLOCK,
					start=pos,
					line=pos_to_line(newlines, pos),
					parent=owner,
				)
			_attach_directives(content, pending, text, newlines)
			stack.append(content)
			saved_depths.append(paren_depth)
			paren_depth = 0
			header_chars = []
			header_start = None
			pos += 1
			continue

		if ch == "}":
			# unmatched closers are ignored
			if len(stack) > 1:
				stack.pop()
				paren_depth = saved_depths.pop()
			header_chars = []
			header_start = None
			pos += 1
			continue

		if ch == ";" and paren_depth == 0:
			header_chars = []
			header_start = None
			pos += 1
			continue

		if ch == "(":
			paren_depth += 1
		elif ch == ")" and paren_depth > 0:
			paren_depth -= 1
		if header_start is None:
			header_start = pos
		header_chars.append(ch)
		pos += 1

	_attach_directives(stack[-1], pending, text, newlines)
	return root
