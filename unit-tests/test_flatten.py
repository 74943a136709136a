from unittest import TestCase

from data_vault import get_nested_tree, get_sample_tree, group_by_name, names
from kpasslite.flatten import expand_ancestors, find_position, get_visible_items, set_expanded_all


class TestFlatten(TestCase):
    def test_root_expanded_at_start(self):
        items = get_visible_items(get_sample_tree())
        self.assertEqual(names(items), ['Root', 'Banking', 'Email'])
        self.assertEqual([x.depth for x in items], [0, 1, 1])
        self.assertEqual([x.position for x in items], [0, 1, 2])

    def test_expand_shows_children_in_order(self):
        tree = get_nested_tree()
        group_by_name(tree, 'Database').expanded = True
        self.assertEqual(names(get_visible_items(tree)), ['Root', 'Database', 'Internet', 'Work', 'Finance'])

    def test_collapsed_group_hides_whole_subtree(self):
        tree = get_nested_tree()
        set_expanded_all(tree, True)
        group_by_name(tree, 'Work').expanded = False
        visible = names(get_visible_items(tree))
        self.assertIn('Work', visible)
        self.assertNotIn('Servers', visible)
        self.assertNotIn('Linux', visible)
        # Servers keeps its own flag but stays hidden
        self.assertTrue(group_by_name(tree, 'Servers').expanded)

    def test_flatten_is_deterministic(self):
        tree = get_nested_tree()
        set_expanded_all(tree, True)
        self.assertEqual(get_visible_items(tree), get_visible_items(tree))

    def test_collapse_then_expand_restores_subtree(self):
        tree = get_nested_tree()
        set_expanded_all(tree, True)
        before = names(get_visible_items(tree))
        internet = group_by_name(tree, 'Internet')
        internet.expanded = False
        self.assertNotIn('Shopping', names(get_visible_items(tree)))
        internet.expanded = True
        self.assertEqual(names(get_visible_items(tree)), before)

    def test_depths(self):
        tree = get_nested_tree()
        set_expanded_all(tree, True)
        depths = {x.group.name: x.depth for x in get_visible_items(tree)}
        self.assertEqual(depths['Root'], 0)
        self.assertEqual(depths['Database'], 1)
        self.assertEqual(depths['Servers'], 3)
        self.assertEqual(depths['Linux'], 4)

    def test_expand_ancestors(self):
        tree = get_nested_tree()
        linux = group_by_name(tree, 'Linux')
        expand_ancestors(tree, linux)
        self.assertFalse(linux.expanded)
        items = get_visible_items(tree)
        self.assertEqual(find_position(items, linux), 5)

    def test_collapse_all(self):
        tree = get_nested_tree()
        set_expanded_all(tree, False)
        self.assertEqual(names(get_visible_items(tree)), ['Root'])

    def test_find_position_hidden(self):
        tree = get_nested_tree()
        self.assertIsNone(find_position(get_visible_items(tree), group_by_name(tree, 'Linux')))
