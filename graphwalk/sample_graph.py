"""Canonical 22-node graph shown by the traversal canvas."""

NODES = tuple(range(1, 23))

EDGES = (
    (1, 2), (1, 3), (1, 4), (1, 5), (1, 6), (1, 7), (1, 8), (1, 9),
    (2, 1), (3, 1), (4, 1), (5, 1), (6, 1), (7, 1), (8, 1), (9, 1),
    (10, 3), (10, 4), (10, 5),
    (6, 11), (11, 10), (10, 11), (11, 12),
    (7, 13), (8, 13),
    (13, 14), (14, 15), (15, 16), (16, 17),
    (17, 18), (18, 19), (18, 21),
    (22, 17), (17, 20),
    (10, 15),
    (19, 22),
)

ROOT = 1
