# Standard Library
import dataclasses


COMPILATION_UNIT = "CompilationUnit"
NAMESPACE_DECLARATION = "NamespaceDeclaration"
TYPE_DECLARATION = "TypeDeclaration"
PROPERTY_DECLARATION = "PropertyDeclaration"
ACCESSOR_DECLARATION = "AccessorDeclaration"
METHOD_DECLARATION = "MethodDeclaration"
LOCAL_FUNCTION_STATEMENT = "LocalFunctionStatement"
LAMBDA_EXPRESSION = "LambdaExpression"
INITIALIZER_EXPRESSION = "InitializerExpression"
SWITCH_STATEMENT = "SwitchStatement"
SWITCH_EXPRESSION = "SwitchExpression"
IF_STATEMENT = "IfStatement"
ELSE_CLAUSE = "ElseClause"
FOR_STATEMENT = "ForStatement"
FOREACH_STATEMENT = "ForEachStatement"
WHILE_STATEMENT = "WhileStatement"
DO_STATEMENT = "DoStatement"
TRY_STATEMENT = "TryStatement"
CATCH_CLAUSE = "CatchClause"
FINALLY_CLAUSE = "FinallyClause"
USING_STATEMENT = "UsingStatement"
LOCK_STATEMENT = "LockStatement"
FIXED_STATEMENT = "FixedStatement"
CHECKED_STATEMENT = "CheckedStatement"
UNSAFE_STATEMENT = "UnsafeStatement"

# The only kind counted as an element body.
BLOCK = "Block"

REGION_DIRECTIVE = "RegionDirectiveTrivia"
END_REGION_DIRECTIVE = "EndRegionDirectiveTrivia"
IF_DIRECTIVE = "IfDirectiveTrivia"
ELIF_DIRECTIVE = "ElifDirectiveTrivia"
ELSE_DIRECTIVE = "ElseDirectiveTrivia"
END_IF_DIRECTIVE = "EndIfDirectiveTrivia"
OTHER_DIRECTIVE = "DirectiveTrivia"

DIRECTIVE_KINDS = {
	REGION_DIRECTIVE,
	END_REGION_DIRECTIVE,
	IF_DIRECTIVE,
	ELIF_DIRECTIVE,
	ELSE_DIRECTIVE,
	END_IF_DIRECTIVE,
	OTHER_DIRECTIVE,
}


#============================================


@dataclasses.dataclass(frozen=True, eq=False)
class SyntaxNode:
	"""
	Node in a parsed syntax tree.

	Nodes compare by identity. The parent link is fixed at construction and
	children are only appended by the tree builder, in source order.
	"""
	kind: str
	start: int = 0
	line: int = 1
	name: str = ""
	parent: "SyntaxNode | None" = dataclasses.field(default=None, repr=False)
	children: list["SyntaxNode"] = dataclasses.field(default_factory=list, repr=False)

	def __post_init__(self) -> None:
		if self.parent is not None:
			self.parent.children.append(self)

	def ancestors_and_self(self):
		"""
		Yield this node, then each ancestor up to the root.
		"""
		node: SyntaxNode | None = self
		while node is not None:
			yield node
			node = node.parent

	def ancestors(self):
		"""Yield each ancestor up to the root."""
		node = self.parent
		while node is not None:
			yield node
			node = node.parent

	def root(self) -> "SyntaxNode":
		node = self
		while node.parent is not None:
			node = node.parent
		return node

	def iter_descendants(self):
		"""
		Yield descendants in document order (pre-order, self excluded).
		"""
		pending = list(reversed(self.children))
		while pending:
			node = pending.pop()
			yield node
			pending.extend(reversed(node.children))

	def is_directive(self) -> bool:
		return self.kind in DIRECTIVE_KINDS
