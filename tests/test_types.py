import numpy as np
import pytest
from mesh_collide import CollisionConfig, Mesh, Transform


def test_axis_angle_quarter_turn():
    """90 degrees about z maps +x to +y, then translates."""
    tf = Transform.from_axis_angle((0.0, 0.0, 1.0), np.pi / 2.0, (1.0, 2.0, 3.0))
    assert np.allclose(tf.apply([1.0, 0.0, 0.0]), [1.0, 3.0, 3.0])


def test_quaternion_matches_axis_angle():
    angle = 0.9
    axis = np.array([1.0, -2.0, 0.5])
    axis_unit = axis / np.linalg.norm(axis)
    q = np.concatenate([[np.cos(angle / 2.0)], np.sin(angle / 2.0) * axis_unit])

    a = Transform.from_axis_angle(axis, angle)
    # Unnormalized quaternion is accepted
    b = Transform.from_quaternion(3.0 * q)
    assert np.allclose(a.rotation, b.rotation)


def test_apply_stack_of_points():
    tf = Transform.from_axis_angle((1.0, 1.0, 1.0), 1.3, (0.5, -0.5, 2.0))
    pts = np.random.default_rng(3).normal(size=(5, 4, 3))
    out = tf.apply(pts)
    assert out.shape == (5, 4, 3)
    assert np.allclose(out[2, 1], tf.rotation @ pts[2, 1] + tf.translation)


def test_homogeneous_matrix_round_trip():
    tf = Transform.from_axis_angle((0.0, 1.0, 0.0), -0.4, (1.0, 0.0, -2.0))
    again = Transform.from_matrix(tf.matrix())
    assert np.allclose(again.rotation, tf.rotation)
    assert np.allclose(again.translation, tf.translation)


@pytest.mark.parametrize("rotation", [
    np.diag([2.0, 1.0, 1.0]),          # scaling
    np.diag([1.0, 1.0, -1.0]),         # reflection
    np.ones((3, 3)),                   # not orthonormal
    np.eye(4),                         # wrong shape
    np.full((3, 3), np.nan),           # non-finite
])
def test_non_rigid_rotation_rejected(rotation):
    with pytest.raises(ValueError):
        Transform(rotation, (0.0, 0.0, 0.0))


def test_bad_translation_and_axis_rejected():
    with pytest.raises(ValueError):
        Transform(np.eye(3), (1.0, 2.0))
    with pytest.raises(ValueError):
        Transform.from_axis_angle((0.0, 0.0, 0.0), 1.0)
    with pytest.raises(ValueError):
        Transform.from_quaternion((0.0, 0.0, 0.0, 0.0))
    with pytest.raises(ValueError):
        Transform.from_matrix(np.ones((4, 4)))


def test_transform_is_read_only():
    tf = Transform.identity()
    with pytest.raises(ValueError):
        tf.translation[0] = 1.0


def test_mesh_coercion_and_read_only():
    mesh = Mesh([[0, 0, 0], [1, 0, 0], [0, 1, 0]], [[0, 1, 2]])
    assert mesh.vertices.dtype == np.float64
    assert mesh.triangles.dtype == np.int64
    assert mesh.num_vertices == 3
    assert mesh.num_triangles == 1
    assert not mesh.is_empty
    with pytest.raises(ValueError):
        mesh.vertices[0, 0] = 5.0
    with pytest.raises(ValueError):
        mesh.triangles[0, 0] = 2


@pytest.mark.parametrize("vertices, triangles", [
    ([[0.0, 0.0], [1.0, 0.0]], []),                      # 2D vertices
    ([[0.0, 0.0, np.inf]], []),                          # non-finite
    ([[0.0, 0.0, 0.0]] * 3, [[0, 1]]),                   # pair instead of triple
    ([[0.0, 0.0, 0.0]] * 3, [[0.0, 1.0, 2.0]]),          # float indices
])
def test_mesh_shape_errors(vertices, triangles):
    with pytest.raises(ValueError):
        Mesh(vertices, triangles)


def test_world_triangles_layout():
    mesh = Mesh([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]],
                [[0, 1, 2], [0, 2, 3]])
    tris = mesh.world_triangles(Transform.from_translation((0.0, 0.0, 10.0)))
    assert tris.shape == (2, 3, 3)
    assert np.allclose(tris[1, 2], [0.0, 0.0, 11.0])


@pytest.mark.parametrize("kwargs", [
    {"axis_eps": -1.0},
    {"max_workers": 0},
    {"chunk_size": 0},
])
def test_config_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        CollisionConfig(**kwargs)


def test_config_worker_resolution():
    assert CollisionConfig(max_workers=3).workers == 3
    assert CollisionConfig().workers >= 1
    assert CollisionConfig().axis_eps == 1e-8
