"""Two sphere meshes at shrinking center distances, each tested with collide()."""
from mesh_collide import collide, collide_query, CollisionQuery, Transform
from mesh_collide.meshgen import sphere_mesh

radius = 1.5
ball = sphere_mesh(radius, stacks=30, slices=30)
print("triangles per object:", ball.num_triangles)

scenarios = {
    "far apart": (radius * 2.5, 0.0, 0.0),
    "close call": (radius * 1.2, radius * 1.2, radius * 1.2),
    "deep intersection": (radius * 0.5, 0.0, 0.0),
}

for name, offset in scenarios.items():
    hit = collide(ball, Transform.identity(), ball, Transform.from_translation(offset))
    print(f"{name:18s} ->", "[COLLISION]" if hit else "[SAFE]")

# Rotating one copy breaks the parallel pole slivers that make the close call over-report
tilted = Transform.from_axis_angle((1.0, 0.0, 0.0), 0.3, scenarios["close call"])
result = collide_query(CollisionQuery(ball, Transform.identity(), ball, tilted))
print("close call, tilted ->", "[COLLISION]" if result else "[SAFE]",
      "| boxes overlap:", result.broadphase_overlap)
