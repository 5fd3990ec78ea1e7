"""
===============================================================================
RAY TRACER TESTS
===============================================================================

End-to-end traces through slabs, circles and overlapping prisms:

1. SCENARIOS
   - air -> glass at 30 degrees: refraction angle and reflected power
   - water -> air at 50 degrees: total internal reflection, no refraction
   - normal incidence: undeviated refraction, R = ((n1 - n2) / (n1 + n2))^2

2. INVARIANTS
   - power conservation at every split
   - round trip through a parallel slab restores the direction
   - phase flips by pi on reflection off a denser medium
   - white light disperses (blue bends more than red)

3. LIMITS
   - depth budget, power cutoff, max_rays warning
   - laser off / laser outside the traced region
   - overlapping prisms: the earlier prism wins

4. CORNERS AND GRAZING INCIDENCE
   - a ray through a triangle apex is refracted into the glass
   - grazing incidence reflects almost everything, tangent rays stay outside
   - two prisms sharing a face: one crossing, the earlier prism wins

Run with:
    python developer_tests/test_tracer.py

Or with pytest:
    pytest developer_tests/test_tracer.py -v
===============================================================================
"""

import sys
import math
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from bending_light.core.geometry import Vector2
from bending_light.core.laser import Laser
from bending_light.core.medium import Medium, AIR, WATER, GLASS, DIAMOND
from bending_light.core.scene import Scene, Prism
from bending_light.core.shapes import Circle, Polygon
from bending_light.core.tracer import RayTracer, trace, split_powers
from bending_light.optical_elements.prisms import triangle_prism


TOLERANCE = 1e-9
ANGLE_TOLERANCE = 0.01  # degrees

VACUUM = Medium('Vacuum', 1.0)


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


# =============================================================================
# SCENE BUILDERS
# =============================================================================

def build_slab_scene(medium=GLASS, environment=VACUUM, bottom=-100.0):
    """A wide slab filling y in [bottom, 0]."""
    slab = Polygon([(-500, bottom), (500, bottom), (500, 0), (-500, 0)])
    return Scene(environment_medium=environment, prisms=[Prism(slab, medium)])


def laser_hitting_origin(theta1_deg, height=50.0, **kwargs):
    """Laser above the slab, aimed at the origin, theta1 from the normal."""
    theta1 = math.radians(theta1_deg)
    tail = Vector2(-height * math.tan(theta1), height)
    return Laser(tail, -math.pi / 2 + theta1, **kwargs)


def children_of(segments, parent):
    return [s for s in segments if s.parent_uuid == parent.uuid]


def angle_from_downward_normal(direction):
    return math.degrees(math.atan2(direction.x, -direction.y))


# =============================================================================
# SCENARIOS
# =============================================================================

def test_air_to_glass_at_30_degrees():
    segments = RayTracer().trace(build_slab_scene(), laser_hitting_origin(30.0))

    source = segments[0]
    assert source.interaction_type == 'source'
    assert_close(source.length, 50.0 / math.cos(math.radians(30.0)), 1e-9, "source length")
    assert_close(source.tip.x, 0.0, 1e-9, "hit point x")

    children = children_of(segments, source)
    reflected = [c for c in children if c.interaction_type == 'reflect']
    refracted = [c for c in children if c.interaction_type == 'refract']
    assert len(reflected) == 1 and len(refracted) == 1

    theta2 = angle_from_downward_normal(refracted[0].direction)
    assert_close(theta2, 19.47, ANGLE_TOLERANCE, "refraction angle")
    assert_close(reflected[0].power, 0.04152, 1e-4, "reflected power")
    assert_close(reflected[0].power + refracted[0].power, source.power, msg="split")
    assert_close(refracted[0].index_of_refraction, 1.5, 1e-12, "refracted ray is in glass")
    assert reflected[0].direction.y > 0, "reflection goes back up"


def test_water_to_air_at_50_degrees_is_tir():
    water = Polygon([(-500, -200), (500, -200), (500, 0), (-500, 0)])
    scene = Scene(environment_medium=AIR, prisms=[Prism(water, WATER)])
    theta1 = math.radians(50.0)
    laser = Laser(Vector2(0, -50), math.pi / 2 - theta1)

    segments = RayTracer().trace(scene, laser)
    source = segments[0]
    assert_close(source.index_of_refraction, 1.333, 1e-12, "source starts in water")

    children = children_of(segments, source)
    assert len(children) == 1, "TIR produces a single child"
    assert children[0].interaction_type == 'tir'
    assert_close(children[0].power, source.power, msg="TIR keeps all the power")
    assert children[0].direction.y < 0


def test_normal_incidence():
    laser = Laser(Vector2(0, 50), -math.pi / 2)
    segments = RayTracer().trace(build_slab_scene(), laser)
    source = segments[0]
    children = children_of(segments, source)
    refracted = [c for c in children if c.interaction_type == 'refract'][0]
    reflected = [c for c in children if c.interaction_type == 'reflect'][0]

    assert_close(refracted.direction.x, 0.0, msg="undeviated")
    assert_close(refracted.direction.y, -1.0, msg="undeviated")
    assert_close(reflected.power, ((1.0 - 1.5) / (1.0 + 1.5)) ** 2, msg="normal incidence R")


# =============================================================================
# INVARIANTS
# =============================================================================

def test_power_conserved_at_every_split():
    scene = build_slab_scene()
    scene.max_depth = 10
    scene.min_power_exp = 30
    tracer = RayTracer()
    segments = tracer.trace(scene, laser_hitting_origin(40.0))

    assert tracer.truncated_power == 0.0
    for segment in segments:
        children = children_of(segments, segment)
        if children:
            assert_close(sum(c.power for c in children), segment.power, 1e-12, "children sum")

    leaves = [s for s in segments if not children_of(segments, s)]
    assert_close(sum(s.power for s in leaves), 1.0, 1e-12, "leaf power")


def test_power_cutoff():
    scene = build_slab_scene()
    tracer = RayTracer()
    segments = tracer.trace(scene, laser_hitting_origin(40.0))

    threshold = scene.get_min_power_threshold()
    assert tracer.truncated_power > 0.0
    for segment in segments:
        assert segment.power >= threshold, "segments below the cutoff are never traced"


def test_slab_round_trip_restores_direction():
    laser = laser_hitting_origin(35.0)
    segments = RayTracer().trace(build_slab_scene(), laser)
    source = segments[0]

    inside = [c for c in children_of(segments, source) if c.interaction_type == 'refract'][0]
    out = [c for c in children_of(segments, inside) if c.interaction_type == 'refract'][0]

    assert_close(out.direction.x, laser.direction.x, 1e-9, "exit direction x")
    assert_close(out.direction.y, laser.direction.y, 1e-9, "exit direction y")
    assert_close(out.tail.y, -100.0, 1e-9, "exits through the bottom face")


def test_circle_through_center_is_undeviated():
    scene = Scene(environment_medium=VACUUM, prisms=[Prism(Circle(Vector2(0, 0), 10.0), GLASS)])
    segments = RayTracer().trace(scene, Laser(Vector2(-50, 0), 0.0))
    for segment in segments:
        if segment.interaction_type == 'refract':
            assert_close(segment.direction.y, 0.0, 1e-9, "no deviation along a diameter")


def test_phase_flip_on_external_reflection():
    segments = RayTracer().trace(build_slab_scene(), laser_hitting_origin(30.0))
    source = segments[0]
    children = children_of(segments, source)
    reflected = [c for c in children if c.interaction_type == 'reflect'][0]
    refracted = [c for c in children if c.interaction_type == 'refract'][0]

    end_phase = source.end_phase()
    assert_close(math.cos(refracted.phase), math.cos(end_phase), 1e-9, "refracted continues phase")
    assert_close(math.cos(reflected.phase), math.cos(end_phase + math.pi), 1e-9, "reflected flips")
    assert_close(math.sin(reflected.phase), math.sin(end_phase + math.pi), 1e-9, "reflected flips")


def test_white_light_disperses():
    laser = laser_hitting_origin(30.0, color_mode='white')
    segments = RayTracer().trace(build_slab_scene(), laser)

    sources = [s for s in segments if s.interaction_type == 'source']
    assert len(sources) == 7
    assert_close(sum(s.power for s in sources), 1.0, 1e-12, "bundle power")

    angles = {}
    for source in sources:
        refracted = [c for c in children_of(segments, source) if c.interaction_type == 'refract'][0]
        assert refracted.wavelength == source.wavelength
        assert refracted.color == source.color
        angles[source.wavelength] = angle_from_downward_normal(refracted.direction)

    assert angles[400.0] < angles[700.0], "blue bends more than red"
    assert len(set(round(a, 9) for a in angles.values())) == 7


def test_children_lineage():
    segments = RayTracer().trace(build_slab_scene(), laser_hitting_origin(30.0))
    by_uuid = {s.uuid: s for s in segments}
    for segment in segments:
        if segment.interaction_type == 'source':
            assert segment.parent_uuid is None
            assert segment.depth == 0
        else:
            parent = by_uuid[segment.parent_uuid]
            assert segment.depth == parent.depth + 1
            assert_close(segment.tail.distance(parent.tip), 0.0, 1e-9, "child starts at parent tip")
        assert math.isfinite(segment.length)


# =============================================================================
# LIMITS
# =============================================================================

def test_depth_limit():
    scene = build_slab_scene()
    scene.max_depth = 1
    segments = RayTracer().trace(scene, laser_hitting_origin(30.0))
    assert max(s.depth for s in segments) == 1
    for segment in segments:
        if segment.depth == 1:
            assert children_of(segments, segment) == []


def test_max_rays_warning():
    scene = build_slab_scene()
    tracer = RayTracer(max_rays=3)
    segments = tracer.trace(scene, laser_hitting_origin(30.0))
    assert len(segments) == 3
    assert tracer.processed_ray_count == 3
    assert tracer.warning is not None and "maximum ray count" in tracer.warning
    assert scene.warning == tracer.warning


def test_laser_off_and_outside():
    scene = build_slab_scene()
    tracer = RayTracer()
    assert tracer.trace(scene, Laser(Vector2(0, 50), -math.pi / 2, on=False)) == []
    assert tracer.warning is None

    outside = Laser(Vector2(5000, 0), math.pi)
    assert tracer.trace(scene, outside) == []
    assert tracer.warning is not None

    assert trace(scene.snapshot(), Laser(Vector2(0, 50), -math.pi / 2))


def test_miss_goes_to_bounds():
    scene = build_slab_scene()
    segments = RayTracer().trace(scene, Laser(Vector2(0, 50), math.pi / 2))
    assert len(segments) == 1
    assert_close(segments[0].tip.y, 1000.0, 1e-9, "exits at the top bound")


def test_earlier_prism_wins_overlap():
    square = Polygon([(-50, -50), (50, -50), (50, 0), (-50, 0)])
    laser = Laser(Vector2(0, 50), -math.pi / 2)

    for first, second in ((GLASS, DIAMOND), (DIAMOND, GLASS)):
        scene = Scene(environment_medium=VACUUM, prisms=[Prism(square, first), Prism(square, second)])
        segments = RayTracer().trace(scene, laser)
        refracted = [c for c in children_of(segments, segments[0]) if c.interaction_type == 'refract'][0]
        assert_close(refracted.index_of_refraction, first.index_of_refraction(650), 1e-12, "first prism wins")


def test_snapshot_is_isolated_from_scene_edits():
    scene = build_slab_scene()
    snapshot = scene.snapshot()
    scene.clear()
    segments = RayTracer().trace(snapshot, laser_hitting_origin(30.0))
    assert len(segments) > 1, "the snapshot still has the slab"


# =============================================================================
# CORNERS, GRAZING INCIDENCE AND SHARED BOUNDARIES
# =============================================================================

def test_ray_through_triangle_apex_enters_the_glass():
    prism = triangle_prism((0.0, 0.0), 100.0, GLASS)
    apex = max(prism.shape.vertices, key=lambda v: v.y)
    scene = Scene(environment_medium=VACUUM, prisms=[prism])
    segments = RayTracer().trace(scene, Laser(Vector2(apex.x, 200.0), -math.pi / 2))

    source = segments[0]
    assert_close(source.tip.y, apex.y, 1e-9, "source ends at the apex")

    children = children_of(segments, source)
    reflected = [c for c in children if c.interaction_type == 'reflect']
    refracted = [c for c in children if c.interaction_type == 'refract']
    assert len(reflected) == 1 and len(refracted) == 1, "one Fresnel split at the corner"
    assert_close(refracted[0].index_of_refraction, 1.5, 1e-12, "inside the glass")
    assert reflected[0].power > 0.0
    assert_close(reflected[0].power + refracted[0].power, source.power, msg="split")

    # The light inside eventually leaves the prism again
    assert any(s.depth >= 2 and s.index_of_refraction == 1.0 for s in segments)


def test_grazing_incidence_reflects_almost_everything():
    tracer = RayTracer()
    segments = tracer.trace(build_slab_scene(), laser_hitting_origin(89.9, height=0.1))
    assert tracer.warning is None

    source = segments[0]
    children = children_of(segments, source)
    reflected = [c for c in children if c.interaction_type == 'reflect'][0]
    refracted = [c for c in children if c.interaction_type == 'refract'][0]

    expected_R, _ = split_powers(1.0, 1.5, math.radians(89.9))
    assert_close(reflected.power, expected_R, 1e-9, "grazing R")
    assert reflected.power > 0.98
    assert refracted.power > 0.0
    assert_close(reflected.power + refracted.power, 1.0, msg="split")

    for segment in segments:
        assert math.isfinite(segment.length) and segment.length >= 0.0
        assert math.isfinite(segment.power)


def test_ray_tangent_to_circle_stays_outside():
    scene = Scene(environment_medium=VACUUM, prisms=[Prism(Circle(Vector2(0, 0), 10.0), GLASS)])
    tracer = RayTracer()
    segments = tracer.trace(scene, Laser(Vector2(-100.0, 10.0), 0.0))
    assert tracer.warning is None

    for segment in segments:
        assert math.isfinite(segment.length) and segment.length >= 0.0
        if segment.index_of_refraction != 1.0:
            assert segment.power < 1e-9, "no power enters the circle at grazing"

    escaped = [s for s in segments if abs(s.tip.x - 1000.0) < 1e-6]
    assert_close(sum(s.power for s in escaped) + tracer.truncated_power, 1.0, 1e-9, "all power carries on")
    assert all(s.index_of_refraction == 1.0 for s in escaped)


def test_shared_face_counts_once_and_earlier_prism_wins():
    block = Polygon([(0, -10), (10, -10), (10, 0), (0, 0)])
    tank = Polygon([(-10, -30), (30, -30), (30, 0), (-10, 0)])
    laser = Laser(Vector2(5.0, 50.0), -math.pi / 2)
    n_water = WATER.index_of_refraction(650)

    # Both tops are hit at the same distance; the block is listed first
    scene = Scene(environment_medium=VACUUM, prisms=[Prism(block, GLASS), Prism(tank, WATER)])
    segments = RayTracer().trace(scene, laser)
    children = children_of(segments, segments[0])
    assert len(children) == 2, "the shared face is a single crossing"
    entered = [c for c in children if c.interaction_type == 'refract'][0]
    assert_close(entered.index_of_refraction, 1.5, 1e-12, "glass block wins the tie")
    below = [c for c in children_of(segments, entered) if c.interaction_type == 'refract'][0]
    assert_close(below.index_of_refraction, n_water, 1e-12, "glass -> water under the block")

    # Tank listed first: it owns the overlap, so water lies on both sides of
    # the block's bottom and the ray passes it unchanged
    scene = Scene(environment_medium=VACUUM, prisms=[Prism(tank, WATER), Prism(block, GLASS)])
    segments = RayTracer().trace(scene, laser)
    children = children_of(segments, segments[0])
    assert len(children) == 2
    entered = [c for c in children if c.interaction_type == 'refract'][0]
    assert_close(entered.index_of_refraction, n_water, 1e-12, "water tank wins the tie")

    onward = children_of(segments, entered)
    assert len(onward) == 1, "no split between identical media"
    assert_close(onward[0].tail.y, -10.0, 1e-9, "block bottom")
    assert_close(onward[0].power, entered.power, msg="nothing reflected")
    assert onward[0].direction == entered.direction
    assert len(children_of(segments, onward[0])) == 2, "next split at the tank floor"


# =============================================================================
# TEST RUNNER
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("RAY TRACER TESTS")
    print("=" * 78)

    tests = [
        ("Air -> glass at 30 deg", test_air_to_glass_at_30_degrees),
        ("Water -> air at 50 deg (TIR)", test_water_to_air_at_50_degrees_is_tir),
        ("Normal incidence", test_normal_incidence),
        ("Power conservation", test_power_conserved_at_every_split),
        ("Power cutoff", test_power_cutoff),
        ("Slab round trip", test_slab_round_trip_restores_direction),
        ("Circle diameter", test_circle_through_center_is_undeviated),
        ("Phase flip", test_phase_flip_on_external_reflection),
        ("White light", test_white_light_disperses),
        ("Lineage", test_children_lineage),
        ("Depth limit", test_depth_limit),
        ("max_rays warning", test_max_rays_warning),
        ("Laser off / outside", test_laser_off_and_outside),
        ("Miss to bounds", test_miss_goes_to_bounds),
        ("Overlapping prisms", test_earlier_prism_wins_overlap),
        ("Snapshot isolation", test_snapshot_is_isolated_from_scene_edits),
        ("Triangle apex", test_ray_through_triangle_apex_enters_the_glass),
        ("Grazing incidence", test_grazing_incidence_reflects_almost_everything),
        ("Tangent to circle", test_ray_tangent_to_circle_stays_outside),
        ("Shared face tie", test_shared_face_counts_once_and_earlier_prism_wins),
    ]

    passed = 0
    errors = []

    for name, test_func in tests:
        try:
            test_func()
            passed += 1
            print(f"  PASS: {name}")
        except Exception as e:
            errors.append((name, str(e)))
            print(f"  FAILED: {name}")
            print(f"    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 78)
    return not errors


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
