"""
Unit tests for the in-memory menu tree
Tests for: create, update/move, delete policies, reorder, arrange, listing
"""
import random

import pytest

from spmi.domain.exceptions import CycleError, NotFoundError, ValidationError
from spmi.domain.menu import MenuNode, MenuTree


def orders(tree, parent_id=None):
    return [(node.id, node.order) for node in tree.children(parent_id)]


@pytest.fixture
def tree():
    """
    A(0)
      A1(0)
      A2(1)
    B(1)
    C(2)
    """
    tree = MenuTree()
    tree.create("Profil", url="/profil", node_id="A")
    tree.create("Dokumen", page_id="page-1", node_id="B")
    tree.create("Kontak", url="/kontak", node_id="C")
    tree.create("Visi Misi", url="/profil/visi", parent_id="A", node_id="A1")
    tree.create("Struktur", url="/profil/struktur", parent_id="A", node_id="A2")
    return tree


def collect_ids(entries):
    ids = []
    for entry in entries:
        ids.append(entry.node.id)
        ids.extend(collect_ids(entry.children))
    return ids


class TestCreate:
    def test_appends_with_next_order(self, tree):
        assert orders(tree) == [("A", 0), ("B", 1), ("C", 2)]
        assert orders(tree, "A") == [("A1", 0), ("A2", 1)]

    def test_first_child_gets_order_zero(self, tree):
        node = tree.create("Kebijakan", url="/kebijakan", parent_id="B")
        assert node.order == 0
        assert node.parent_id == "B"

    def test_order_follows_highest_sibling(self):
        tree = MenuTree.from_nodes([
            MenuNode(id="X", title="X", order=4),
            MenuNode(id="Y", title="Y", order=9),
        ])
        assert tree.create("Z").order == 10

    def test_label_only_node_is_allowed(self, tree):
        node = tree.create("Layanan")
        assert node.url is None
        assert node.page_id is None

    def test_empty_strings_are_treated_as_unset(self, tree):
        node = tree.create("Layanan", url="", page_id="", parent_id="")
        assert node.url is None
        assert node.parent_id is None

    def test_url_and_page_together_fail(self, tree):
        with pytest.raises(ValidationError):
            tree.create("Both", url="/x", page_id="page-1")

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_blank_title_fails(self, tree, title):
        with pytest.raises(ValidationError):
            tree.create(title, url="/x")

    def test_unknown_parent_fails(self, tree):
        with pytest.raises(NotFoundError):
            tree.create("Orphan", url="/x", parent_id="missing")

    def test_duplicate_id_fails(self, tree):
        with pytest.raises(ValidationError):
            tree.create("Again", node_id="A")

    @pytest.mark.parametrize("flag", ["false", 0, 1, None])
    def test_published_flag_must_be_boolean(self, tree, flag):
        with pytest.raises(ValidationError):
            tree.create("Hidden", url="/x", is_published=flag)

    @pytest.mark.parametrize("field", ["url", "page_id", "parent_id"])
    @pytest.mark.parametrize("value", [5, ["A"], {"id": "A"}])
    def test_link_fields_must_be_strings(self, tree, field, value):
        with pytest.raises(ValidationError):
            tree.create("Bad", **{field: value})


class TestUpdate:
    def test_partial_update_keeps_other_fields(self, tree):
        node = tree.update("C", {"title": "Hubungi Kami"})
        assert node.title == "Hubungi Kami"
        assert node.url == "/kontak"
        assert node.order == 2

    def test_switch_target_from_url_to_page(self, tree):
        node = tree.update("C", {"url": None, "page_id": "page-9"})
        assert node.url is None
        assert node.page_id == "page-9"

    def test_setting_page_while_url_kept_fails(self, tree):
        with pytest.raises(ValidationError):
            tree.update("C", {"page_id": "page-9"})

    def test_unpublish(self, tree):
        assert tree.update("C", {"is_published": False}).is_published is False

    def test_string_published_flag_fails_without_changes(self, tree):
        with pytest.raises(ValidationError):
            tree.update("C", {"is_published": "false", "title": "Renamed"})

        assert tree.get("C").is_published is True
        assert tree.get("C").title == "Kontak"

    @pytest.mark.parametrize("fields", [{"url": 5}, {"url": None, "page_id": ["p"]}, {"parent_id": ["A"]}])
    def test_non_string_link_fields_fail(self, tree, fields):
        with pytest.raises(ValidationError):
            tree.update("C", fields)
        assert tree.get("C").parent_id is None

    def test_unknown_field_fails(self, tree):
        with pytest.raises(ValidationError):
            tree.update("C", {"order": 5})

    def test_unknown_node_fails(self, tree):
        with pytest.raises(NotFoundError):
            tree.update("missing", {"title": "x"})

    def test_reparent_moves_to_end_and_compacts_old_siblings(self, tree):
        node = tree.update("B", {"parent_id": "A"})

        assert node.parent_id == "A"
        assert orders(tree, "A") == [("A1", 0), ("A2", 1), ("B", 2)]
        assert orders(tree) == [("A", 0), ("C", 1)]

    def test_reparent_moves_whole_subtree(self, tree):
        tree.update("A", {"parent_id": "C"})

        assert [entry.node.id for entry in tree.list_tree()] == ["B", "C"]
        c_entry = tree.list_tree()[1]
        assert [child.node.id for child in c_entry.children] == ["A"]
        assert [child.node.id for child in c_entry.children[0].children] == ["A1", "A2"]

    def test_reparent_to_root(self, tree):
        tree.update("A2", {"parent_id": None})
        assert orders(tree) == [("A", 0), ("B", 1), ("C", 2), ("A2", 3)]
        assert orders(tree, "A") == [("A1", 0)]

    def test_reparent_under_descendant_is_a_cycle(self, tree):
        with pytest.raises(CycleError):
            tree.update("A", {"parent_id": "A1"})

    def test_reparent_under_itself_is_a_cycle(self, tree):
        with pytest.raises(CycleError):
            tree.update("A", {"parent_id": "A"})

    def test_cycle_scenario_leaves_tree_untouched(self):
        tree = MenuTree()
        tree.create("A", node_id="A")
        tree.create("B", parent_id="A", node_id="B")

        with pytest.raises(CycleError):
            tree.update("A", {"parent_id": "B", "title": "Renamed"})

        assert tree.get("A").parent_id is None
        assert tree.get("A").title == "A"
        assert tree.get("B").parent_id == "A"

    def test_reparent_to_unknown_parent_fails(self, tree):
        with pytest.raises(NotFoundError):
            tree.update("C", {"parent_id": "missing"})


class TestDelete:
    def test_cascade_removes_descendants(self, tree):
        removed = tree.delete("A")

        assert removed == ["A", "A1", "A2"]
        assert orders(tree) == [("B", 0), ("C", 1)]
        assert {node.id for node in tree.nodes()} == {"B", "C"}

    def test_reparent_splices_children_into_place(self, tree):
        removed = tree.delete("A", policy="reparent")

        assert removed == ["A"]
        assert orders(tree) == [("A1", 0), ("A2", 1), ("B", 2), ("C", 3)]
        assert tree.get("A1").parent_id is None

    def test_no_dangling_parent_after_either_policy(self, tree):
        tree.delete("A", policy="reparent")
        tree.create("Sub", parent_id="B", node_id="B1")
        tree.delete("B")

        ids = {node.id for node in tree.nodes()}
        assert all(node.parent_id is None or node.parent_id in ids for node in tree.nodes())

    def test_leaf_delete_compacts_siblings(self, tree):
        tree.delete("A1")
        assert orders(tree, "A") == [("A2", 0)]

    def test_unknown_policy_fails(self, tree):
        with pytest.raises(ValidationError):
            tree.delete("A", policy="orphan")

    def test_unknown_node_fails(self, tree):
        with pytest.raises(NotFoundError):
            tree.delete("missing")


class TestReorder:
    def test_reorder_scenario(self, tree):
        tree.reorder(["C", "A", "B"])
        assert {node.id: node.order for node in tree.children()} == {"C": 0, "A": 1, "B": 2}
        assert [entry.node.id for entry in tree.list_tree()] == ["C", "A", "B"]

    def test_orders_match_positions_for_any_permutation(self, tree):
        ids = ["A", "B", "C"]
        rng = random.Random(7)
        for _ in range(10):
            rng.shuffle(ids)
            tree.reorder(list(ids))
            assert [node.order for node in tree.children()] == [0, 1, 2]
            assert [node.id for node in tree.children()] == ids

    def test_nested_siblings(self, tree):
        tree.reorder(["A2", "A1"])
        assert orders(tree, "A") == [("A2", 0), ("A1", 1)]

    def test_missing_sibling_fails(self, tree):
        with pytest.raises(ValidationError):
            tree.reorder(["C", "A"])

    def test_mixed_parents_fail(self, tree):
        with pytest.raises(ValidationError):
            tree.reorder(["A", "B", "C", "A1"])

    def test_duplicates_fail(self, tree):
        with pytest.raises(ValidationError):
            tree.reorder(["A", "B", "C", "C"])

    def test_unknown_id_fails(self, tree):
        with pytest.raises(ValidationError):
            tree.reorder(["A", "B", "C", "missing"])

    def test_non_string_id_fails(self, tree):
        with pytest.raises(ValidationError):
            tree.reorder(["A", "B", ["C"]])

    def test_empty_list_fails(self, tree):
        with pytest.raises(ValidationError):
            tree.reorder([])


class TestArrange:
    def test_move_into_new_parent(self, tree):
        tree.arrange([{"id": "C", "parent_id": "B", "order": 0}])

        assert orders(tree) == [("A", 0), ("B", 1)]
        assert orders(tree, "B") == [("C", 0)]

    def test_placed_node_wins_order_tie(self, tree):
        tree.arrange([{"id": "C", "parent_id": "A", "order": 0}])
        assert orders(tree, "A") == [("C", 0), ("A1", 1), ("A2", 2)]

    def test_swap_parent_and_child_in_one_payload(self):
        tree = MenuTree()
        tree.create("A", node_id="A")
        tree.create("B", parent_id="A", node_id="B")

        tree.arrange([
            {"id": "B", "parent_id": None, "order": 0},
            {"id": "A", "parent_id": "B", "order": 0},
        ])

        assert tree.get("B").parent_id is None
        assert tree.get("A").parent_id == "B"

    def test_cycle_fails_without_changes(self):
        tree = MenuTree()
        tree.create("A", node_id="A")
        tree.create("B", parent_id="A", node_id="B")

        with pytest.raises(CycleError):
            tree.arrange([{"id": "A", "parent_id": "B", "order": 0}])

        assert tree.get("A").parent_id is None

    def test_non_integer_order_fails(self, tree):
        with pytest.raises(ValidationError):
            tree.arrange([{"id": "C", "parent_id": None, "order": "1"}])

    def test_non_string_parent_fails(self, tree):
        with pytest.raises(ValidationError):
            tree.arrange([{"id": "C", "parent_id": ["A"], "order": 0}])

    def test_non_string_id_fails(self, tree):
        with pytest.raises(ValidationError):
            tree.arrange([{"id": ["C"], "parent_id": None, "order": 0}])

    def test_duplicate_placement_fails(self, tree):
        with pytest.raises(ValidationError):
            tree.arrange([
                {"id": "C", "parent_id": None, "order": 0},
                {"id": "C", "parent_id": "A", "order": 0},
            ])


class TestListTree:
    def test_management_listing_shows_everything(self, tree):
        tree.update("A", {"is_published": False})
        assert collect_ids(tree.list_tree()) == ["A", "A1", "A2", "B", "C"]

    def test_published_listing_hides_unpublished_subtrees(self, tree):
        tree.update("A", {"is_published": False})
        tree.update("C", {"is_published": False})
        assert collect_ids(tree.list_tree(published_only=True)) == ["B"]

    def test_depth_is_unbounded(self):
        tree = MenuTree()
        parent = None
        for depth in range(50):
            parent = tree.create(f"Level {depth}", parent_id=parent).id

        entries = tree.list_tree()
        depth = 0
        while entries:
            depth += 1
            entries = entries[0].children
        assert depth == 50

    def test_random_operations_never_make_a_node_its_own_descendant(self):
        rng = random.Random(2024)
        tree = MenuTree()

        for step in range(200):
            ids = [node.id for node in tree.nodes()]
            if not ids or rng.random() < 0.4:
                tree.create(f"Item {step}", parent_id=rng.choice(ids + [None]) if ids else None)
                continue

            node_id = rng.choice(ids)
            new_parent = rng.choice(ids + [None])
            try:
                tree.update(node_id, {"parent_id": new_parent})
            except CycleError:
                pass

            listed = collect_ids(tree.list_tree())
            assert len(listed) == len(set(listed)) == len(tree.nodes())
            for node in tree.nodes():
                assert node.id not in tree.descendant_ids(node.id)


class TestFromNodes:
    def test_dangling_parent_is_rejected(self):
        with pytest.raises(ValidationError):
            MenuTree.from_nodes([MenuNode(id="A", title="A", parent_id="gone")])

    def test_stored_cycle_is_rejected(self):
        with pytest.raises(CycleError):
            MenuTree.from_nodes([
                MenuNode(id="A", title="A", parent_id="B"),
                MenuNode(id="B", title="B", parent_id="A"),
            ])

    def test_duplicate_orders_are_broken_by_id(self):
        tree = MenuTree.from_nodes([
            MenuNode(id="b", title="B", order=0),
            MenuNode(id="a", title="A", order=0),
        ])
        assert [node.id for node in tree.children()] == ["a", "b"]
