# Local modules
import region_lint.directives
import region_lint.syntax


#============================================


def outermost_block(node: region_lint.syntax.SyntaxNode) -> region_lint.syntax.SyntaxNode | None:
	"""
	Return the Block closest to the root among node and its ancestors.

	Type and namespace bodies are not blocks, so this is the body of the
	smallest enclosing code element; if/for/while blocks nested inside
	that body are skipped over.

	Args:
		node: Starting node.

	Returns:
		SyntaxNode | None: Element body block, or None outside any body.
	"""
	found = None
	for ancestor in node.ancestors_and_self():
		if ancestor.kind == region_lint.syntax.BLOCK:
			found = ancestor
	return found


#============================================


def is_completely_contained_in_body(
	region: region_lint.syntax.SyntaxNode,
	resolver=region_lint.directives.get_related_directives,
) -> bool:
	"""
	Check whether a region and its related directives share one element body.

	Every directive in the group must have the same outermost Block
	(compared by identity). A directive outside any Block, or two
	directives in different bodies, means the region is not contained.

	Args:
		region: Start directive of the region.
		resolver: Callable returning the directive group for region.

	Returns:
		bool: True if the whole group lies inside a single element body.

	Raises:
		ValueError: If region is None.
	"""
	if region is None:
		raise ValueError("region is required")

	body = None
	for directive in resolver(region):
		block = outermost_block(directive)
		if block is None:
			return False
		if body is None:
			body = block
		elif block is not body:
			return False
	return True
