import sys
import os
import random

# Setup de importação
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.roster.structures.balanced_index import BalancedIndex, Traversal

FIRST_ID = 10000000
LAST_ID = 10000010


def check_structure(node):
    """Ordenação e altura em cache (sem exigir balanceamento, que não é refeito na remoção)."""
    if node is None:
        return -1
    if node.left:
        assert node.left.key < node.key
    if node.right:
        assert node.right.key > node.key
    real_height = 1 + max(check_structure(node.left), check_structure(node.right))
    assert node.height == real_height, f"Altura em cache errada em {node}"
    return real_height


def build_index(keys):
    index = BalancedIndex()
    for key in keys:
        assert index.insert(key, f"N{key}")
    return index


def test_front_remove():
    print("--- Teste: Remoção pela frente ---")
    index = build_index(range(FIRST_ID, LAST_ID + 1))

    for key in range(FIRST_ID, LAST_ID + 1):
        assert index.remove(key), f"Falha ao remover {key}"
        check_structure(index.root)

    assert index.depth() == 0
    assert index.root is None
    assert len(index) == 0
    print(">> SUCESSO: Árvore esvaziada.")


def test_back_remove():
    index = build_index(range(LAST_ID, FIRST_ID - 1, -1))

    for key in range(LAST_ID, FIRST_ID - 1, -1):
        assert index.remove(key)

    assert index.depth() == 0


def test_front_remove_by_rank():
    index = build_index(range(LAST_ID, FIRST_ID - 1, -1))

    for _ in range(11):
        assert index.remove_by_rank(0)
        check_structure(index.root)

    assert index.depth() == 0
    assert index.is_empty()


def test_back_remove_by_rank():
    index = build_index(range(LAST_ID, FIRST_ID - 1, -1))

    for rank in range(10, -1, -1):
        assert index.remove_by_rank(rank), f"Falha na posição {rank}"

    assert index.depth() == 0


def test_remove_by_rank_picks_nth_smallest():
    index = build_index(range(1, 11))

    assert index.remove_by_rank(3)
    assert index.lookup_by_key(4) is None
    assert index.traversal(Traversal.INORDER) == [f"N{k}" for k in (1, 2, 3, 5, 6, 7, 8, 9, 10)]
    check_structure(index.root)


def test_remove_by_rank_out_of_bounds():
    index = build_index(range(1, 6))
    before = index.traversal(Traversal.PREORDER)

    assert index.remove_by_rank(5) is False
    assert index.remove_by_rank(100) is False
    assert index.remove_by_rank(-1) is False
    assert index.traversal(Traversal.PREORDER) == before
    assert len(index) == 5


def test_remove_on_empty_index():
    index = BalancedIndex()
    assert index.remove(12345678) is False
    assert index.remove_by_rank(0) is False
    assert index.depth() == 0


def test_remove_missing_key():
    index = build_index([20, 10, 30])
    assert index.remove(25) is False
    assert index.traversal(Traversal.INORDER) == ["N10", "N20", "N30"]


def test_remove_leaf():
    index = build_index([20, 10, 30, 5, 15])

    assert index.remove(5)
    assert index.root.left.key == 10
    assert index.root.left.left is None
    assert index.traversal(Traversal.INORDER) == ["N10", "N15", "N20", "N30"]
    check_structure(index.root)


def test_remove_single_root():
    index = build_index([42])
    assert index.remove(42)
    assert index.root is None


def test_remove_node_with_only_left_child():
    index = build_index([20, 10, 30, 5])
    entry = index.root.left

    assert index.remove(10)
    # O nó permanece no lugar e recebe os dados do filho
    assert index.root.left is entry
    assert entry.key == 5 and entry.label == "N5"
    assert entry.is_leaf
    check_structure(index.root)


def test_remove_node_with_only_right_child():
    index = build_index([20, 10, 30, 15])

    assert index.remove(10)
    assert index.root.left.key == 15
    assert index.root.left.is_leaf
    check_structure(index.root)


def test_remove_two_children_right_without_left_subtree():
    index = build_index([20, 10, 30, 5, 15])

    assert index.remove(10)
    assert index.root.left.key == 15
    assert index.root.left.left.key == 5
    assert index.root.left.right is None
    assert index.traversal(Traversal.INORDER) == ["N5", "N15", "N20", "N30"]
    check_structure(index.root)


def test_remove_two_children_inorder_successor():
    #         20
    #       /    \
    #     10      30
    #    /       /  \
    #   5      25    35
    #         /
    #       22
    index = build_index([20, 10, 30, 5, 25, 35, 22])

    assert index.remove(20)
    assert index.root.key == 22
    assert index.root.right.left.key == 25
    assert index.root.right.left.left is None
    assert index.traversal(Traversal.INORDER) == ["N5", "N10", "N22", "N25", "N30", "N35"]
    assert check_structure(index.root) == 2


def test_remove_then_lookup():
    random.seed(11)
    keys = random.sample(range(10000000, 99999999), 200)
    index = build_index(keys)

    removed = keys[::2]
    for key in removed:
        assert index.remove(key)
        assert index.lookup_by_key(key) is None

    for key in keys[1::2]:
        assert index.lookup_by_key(key) == f"N{key}"
    assert index.traversal(Traversal.INORDER) == [f"N{k}" for k in sorted(keys[1::2])]
    assert len(index) == 100
    check_structure(index.root)


def test_remove_everything_random_order():
    print("--- Teste: Esvaziar árvore em ordem aleatória ---")
    random.seed(99)
    keys = list(range(500))
    random.shuffle(keys)
    index = build_index(keys)

    random.shuffle(keys)
    for key in keys:
        assert index.remove(key)
        assert key not in index

    assert index.depth() == 0
    assert index.traversal(Traversal.LEVELORDER) == []
    print(">> SUCESSO: Nenhum nó restante.")


def test_insert_after_removals_keeps_order():
    index = build_index(range(0, 64))
    for rank in (0, 10, 20, 30):
        assert index.remove_by_rank(rank)

    for key in (100, 101, 102, -1):
        assert index.insert(key, f"N{key}")

    in_order = index.traversal(Traversal.INORDER)
    keys = [int(label[1:]) for label in in_order]
    assert keys == sorted(keys)
    check_structure(index.root)


if __name__ == "__main__":
    test_front_remove()
    test_remove_everything_random_order()
