import numpy as np
import pytest
from mesh_collide.collision.sat import (
    axis_overlap,
    separating_axis,
    tri_tri_intersect,
    tri_tri_intersect_many,
)

TRI_Z0 = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])


def test_degenerate_axis_always_overlaps():
    """Near-zero axes carry no information and must never separate."""
    far = TRI_Z0 + np.array([100.0, -50.0, 7.0])
    for axis in ([0.0, 0.0, 0.0], [1e-5, 0.0, 0.0], [5e-5, 5e-5, 5e-5]):
        assert axis_overlap(np.array(axis), TRI_Z0, far)

    # Same tiny axis separates once the threshold is lowered below |axis|^2
    assert not axis_overlap(np.array([1e-5, 0.0, 0.0]), TRI_Z0, far, eps=0.0)


def test_axis_overlap_touching_counts():
    """Intervals sharing an endpoint overlap; a strict gap separates."""
    x = np.array([1.0, 0.0, 0.0])
    touching = TRI_Z0 + np.array([1.0, 0.0, 0.0])  # x in [1, 2] vs [0, 1]
    assert axis_overlap(x, TRI_Z0, touching)
    assert axis_overlap(x, touching, TRI_Z0)

    gapped = TRI_Z0 + np.array([1.001, 0.0, 0.0])
    assert not axis_overlap(x, TRI_Z0, gapped)
    assert not axis_overlap(x, gapped, TRI_Z0)


def test_parallel_planes_separated_by_face_normal():
    """Triangles in z=0 and z=5 are separated along ±z."""
    upper = TRI_Z0 + np.array([0.0, 0.0, 5.0])
    assert not tri_tri_intersect(TRI_Z0, upper)

    axis = separating_axis(TRI_Z0, upper)
    assert axis is not None
    axis = axis / np.linalg.norm(axis)
    assert np.allclose(np.abs(axis), [0.0, 0.0, 1.0])


def test_coplanar_overlapping():
    u = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0], [0.0, 2.0, 0.0]])
    v = np.array([[0.5, 0.5, 0.0], [3.0, 0.5, 0.0], [0.5, 3.0, 0.0]])
    assert tri_tri_intersect(u, v)
    assert separating_axis(u, v) is None


def test_shared_vertex_touches():
    """Triangles meeting at a single vertex count as intersecting."""
    v = np.array([[0.0, 0.0, 0.0], [-1.0, 0.0, 0.5], [0.0, -1.0, 0.5]])
    assert tri_tri_intersect(TRI_Z0, v)
    assert tri_tri_intersect(v, TRI_Z0)


def test_piercing_triangles():
    """A vertical triangle poking through a horizontal one."""
    u = np.array([[-1.0, -1.0, 0.0], [2.0, -1.0, 0.0], [-1.0, 2.0, 0.0]])
    v = np.array([[0.2, 0.2, -1.0], [0.4, 0.2, 1.0], [0.2, 0.4, 1.0]])
    assert tri_tri_intersect(u, v)


def test_crossed_edges_separated_only_by_edge_axis():
    """
    Two slanted triangles whose face normals both overlap; only an
    edge-edge cross product finds the gap.
    """
    u = np.array([[-1.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, -1.0]])
    v = np.array([[0.0, -1.0, 0.1], [0.0, 1.0, 0.1], [0.0, 0.0, 1.0]])
    # Face normals are ±y and ±x; both projections overlap
    n_u = np.cross(u[1] - u[0], u[2] - u[1])
    n_v = np.cross(v[1] - v[0], v[2] - v[1])
    assert axis_overlap(n_u, u, v)
    assert axis_overlap(n_v, u, v)

    axis = separating_axis(u, v)
    assert axis is not None
    axis = axis / np.linalg.norm(axis)
    assert np.allclose(np.abs(axis), [0.0, 0.0, 1.0])


def test_batched_matches_scalar_on_random_pairs():
    rng = np.random.default_rng(7)
    U = rng.uniform(0.0, 1.0, size=(300, 3, 3))
    V = rng.uniform(0.0, 1.0, size=(300, 3, 3))

    batched = tri_tri_intersect_many(U, V)
    scalar = np.array([tri_tri_intersect(u, v) for u, v in zip(U, V)])

    assert batched.shape == (300,)
    assert np.array_equal(batched, scalar)
    # Sample must exercise both outcomes
    assert scalar.any() and not scalar.all()


def test_batched_broadcasts_all_pairs():
    rng = np.random.default_rng(11)
    U = rng.uniform(0.0, 1.0, size=(6, 3, 3))
    V = rng.uniform(0.0, 1.0, size=(9, 3, 3))

    grid = tri_tri_intersect_many(U[:, None], V[None, :])
    assert grid.shape == (6, 9)
    for i in range(6):
        for j in range(9):
            assert grid[i, j] == tri_tri_intersect(U[i], V[j])


def test_batched_single_pair_and_eps():
    upper = TRI_Z0 + np.array([0.0, 0.0, 5.0])
    assert not bool(tri_tri_intersect_many(TRI_Z0, upper))
    # An epsilon larger than every axis norm disables all separation
    assert bool(tri_tri_intersect_many(TRI_Z0, upper, eps=1e6))
    assert tri_tri_intersect(TRI_Z0, upper, eps=1e6)


@pytest.mark.parametrize("point, expected", [
    ((0.2, 0.2, 0.0), True),     # inside, coplanar
    ((0.2, 0.2, 1e-3), False),   # lifted off the plane: face normal separates
    # Coplanar but outside: only the face normal is non-degenerate, so the
    # collapsed triangle over-reports. Conservative by construction.
    ((3.0, 3.0, 0.0), True),
])
def test_zero_area_triangle_is_conservative(point, expected):
    collapsed = np.tile(np.array(point), (3, 1))
    assert tri_tri_intersect(collapsed, TRI_Z0) is expected
    assert bool(tri_tri_intersect_many(collapsed, TRI_Z0)) is expected
