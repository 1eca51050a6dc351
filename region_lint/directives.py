# Local modules
import region_lint.syntax


#============================================


def collect_directives(root: region_lint.syntax.SyntaxNode) -> list[region_lint.syntax.SyntaxNode]:
	"""
	Return every directive node under root in document order.

	Args:
		root: Tree root (or any subtree).

	Returns:
		list[SyntaxNode]: Directive nodes.
	"""
	directives = [node for node in root.iter_descendants() if node.is_directive()]
	return directives


#============================================


def group_directives(
	directives: list[region_lint.syntax.SyntaxNode],
) -> list[list[region_lint.syntax.SyntaxNode]]:
	"""
	Pair directives with a stack per directive family.

	#region/#endregion pair last-opened first-closed. #if opens a group that
	#elif and #else join and #endif closes. Orphans and unterminated openers
	form single-member groups, so every directive lands in exactly one group.

	Args:
		directives: Directive nodes in document order.

	Returns:
		list[list[SyntaxNode]]: Groups ordered by their first member.
	"""
	groups: list[list[region_lint.syntax.SyntaxNode]] = []
	region_stack: list[list[region_lint.syntax.SyntaxNode]] = []
	conditional_stack: list[list[region_lint.syntax.SyntaxNode]] = []

	for directive in directives:
		kind = directive.kind
		if kind == region_lint.syntax.REGION_DIRECTIVE:
			group = [directive]
			region_stack.append(group)
			groups.append(group)
			continue
		if kind == region_lint.syntax.END_REGION_DIRECTIVE:
			if region_stack:
				region_stack.pop().append(directive)
			else:
				groups.append([directive])
			continue
		if kind == region_lint.syntax.IF_DIRECTIVE:
			group = [directive]
			conditional_stack.append(group)
			groups.append(group)
			continue
		if kind in (region_lint.syntax.ELIF_DIRECTIVE, region_lint.syntax.ELSE_DIRECTIVE):
			if conditional_stack:
				conditional_stack[-1].append(directive)
			else:
				groups.append([directive])
			continue
		if kind == region_lint.syntax.END_IF_DIRECTIVE:
			if conditional_stack:
				conditional_stack.pop().append(directive)
			else:
				groups.append([directive])
			continue
		groups.append([directive])

	return groups


#============================================


def get_related_directives(
	directive: region_lint.syntax.SyntaxNode,
) -> list[region_lint.syntax.SyntaxNode]:
	"""
	Return the group of directives matched with the given one.

	The group is rebuilt from the whole tree on every call.

	Args:
		directive: Any directive node.

	Returns:
		list[SyntaxNode]: Ordered group, always containing directive.
	"""
	if directive is None:
		raise ValueError("directive is required")
	directives = collect_directives(directive.root())
	for group in group_directives(directives):
		if any(member is directive for member in group):
			return list(group)
	# detached from any tree
	return [directive]
