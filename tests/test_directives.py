import pytest

# Local modules
import region_lint.directives
import region_lint.parser
import region_lint.syntax


#============================================


def _directives(text: str) -> list[region_lint.syntax.SyntaxNode]:
	tree = region_lint.parser.parse_text(text)
	return region_lint.directives.collect_directives(tree)


#============================================


def test_nested_regions_pair_last_opened_first_closed() -> None:
	text = (
		"#region Outer\n"
		"#region Inner\n"
		"#endregion\n"
		"#endregion\n"
	)
	outer, inner, inner_end, outer_end = _directives(text)
	groups = region_lint.directives.group_directives([outer, inner, inner_end, outer_end])
	assert groups == [[outer, outer_end], [inner, inner_end]]
	assert region_lint.directives.get_related_directives(inner_end) == [inner, inner_end]
	assert region_lint.directives.get_related_directives(outer) == [outer, outer_end]


def test_conditional_group_holds_every_branch() -> None:
	text = (
		"#if DEBUG\n"
		"#region Debug\n"
		"#elif TRACE\n"
		"#else\n"
		"#endregion\n"
		"#endif\n"
	)
	if_d, region, elif_d, else_d, endregion, endif = _directives(text)
	assert region_lint.directives.get_related_directives(elif_d) == [if_d, elif_d, else_d, endif]
	assert region_lint.directives.get_related_directives(region) == [region, endregion]


@pytest.mark.parametrize(
	"text",
	[
		"#region Open\n",
		"#endregion\n",
		"#else\n",
		"#endif\n",
		"#pragma warning restore\n",
	],
)
def test_unmatched_directive_forms_its_own_group(text: str) -> None:
	(directive,) = _directives(text)
	assert region_lint.directives.get_related_directives(directive) == [directive]


def test_every_directive_lands_in_exactly_one_group() -> None:
	text = (
		"#endregion\n"
		"#region A\n"
		"#if X\n"
		"#region B\n"
		"#endregion\n"
		"#endif\n"
		"#endif\n"
		"#region C\n"
	)
	directives = _directives(text)
	groups = region_lint.directives.group_directives(directives)
	members = [member for group in groups for member in group]
	assert len(members) == len(directives)
	for directive in directives:
		assert sum(1 for member in members if member is directive) == 1


def test_groups_are_recomputed_per_call() -> None:
	directives = _directives("#region A\n#endregion\n")
	first = region_lint.directives.get_related_directives(directives[0])
	second = region_lint.directives.get_related_directives(directives[0])
	assert first == second
	assert first is not second


def test_detached_directive_groups_with_itself() -> None:
	directive = region_lint.syntax.SyntaxNode(region_lint.syntax.REGION_DIRECTIVE)
	assert region_lint.directives.get_related_directives(directive) == [directive]


def test_missing_directive_raises() -> None:
	with pytest.raises(ValueError):
		region_lint.directives.get_related_directives(None)
