import math

import pytest

from softscop.model import (
    Model,
    ModelError,
    calculate_normals,
    cylindrical_texture_coords,
    parse_face,
    planar_texture_coords,
    spherical_texture_coords,
)
from softscop.vector import Vector

SQUARE = [
    "v 0 0 0\n",
    "v 2 0 0\n",
    "v 2 2 0\n",
    "v 0 2 1\n",
    "f 1 2 3 4\n",
]


def test_parse_face_fan_triangulates():
    faces, uvs, normals = parse_face("1 2 3 4", False, False)
    assert faces == [(0, 1, 2), (0, 2, 3)]
    assert uvs == [] and normals == []


def test_parse_face_all_components():
    faces, uvs, normals = parse_face("1/2/3 4/5/6 7/8/9", True, True)
    assert faces == [(0, 3, 6)]
    assert uvs == [(1, 4, 7)]
    assert normals == [(2, 5, 8)]


def test_parse_face_missing_component():
    with pytest.raises(ModelError) as info:
        parse_face("1 2 3", True, False)
    assert info.value.code == -1


def test_parse_face_bad_token():
    with pytest.raises(ModelError) as info:
        parse_face("a b c", False, False)
    assert info.value.code == -1


def test_model_is_normalised():
    model = Model.from_lines(SQUARE)
    coords = [c for v in model.vertices for c in v]
    assert all(-1.0 <= c <= 1.0 for c in coords)
    assert max(abs(c) for c in coords) == pytest.approx(1.0)


def test_generated_uvs_and_normals():
    model = Model.from_lines(SQUARE)
    assert model.face_uvs == model.faces
    assert model.face_normals == model.faces
    assert len(model.uvs) == len(model.vertices)
    assert all(n.norm() == pytest.approx(1.0) for n in model.normals)


def test_explicit_uvs_are_kept():
    lines = ["v 0 0 0", "v 1 0 0", "v 0 1 0", "vt 0.25 0.75", "f 1/1 2/1 3/1"]
    model = Model.from_lines(lines)
    assert list(model.uvs[0]) == [0.25, 0.75]
    assert model.face_uvs == [(0, 0, 0)]
    assert len(model.face_normals) == len(model.faces)


def test_describe_counts():
    lines = Model.from_lines(SQUARE).describe().splitlines()
    assert "verts:\t4" in lines
    assert "faces:\t2" in lines


@pytest.mark.parametrize(
    "lines, code",
    [
        (["v 0 0 0", "v 1 1 1", "v 1 0 0", "f 1 2 9"], 1),
        (["v 0 0 0", "v 1 1 1", "v 1 0 0", "f 0 1 2"], 1),
        (["vt 0 0"], 2),
        (["v 1 1 1", "v 1 1 1", "v 1 1 1", "f 1 2 3"], 2),
        (["v 0 0 0", "v 1 0 0", "v 0 1 0", "f 1 2 3", "vt 0 0", "f 1/1 2/1 3/1"], 3),
    ],
)
def test_model_errors(lines, code):
    with pytest.raises(ModelError) as info:
        Model.from_lines(lines)
    assert info.value.code == code


def test_from_file(tmp_path):
    path = tmp_path / "square.obj"
    path.write_text("".join(SQUARE))
    model = Model.from_file(path)
    assert model.faces == Model.from_lines(SQUARE).faces


def test_from_missing_file(tmp_path):
    with pytest.raises(ModelError) as info:
        Model.from_file(tmp_path / "missing.obj")
    assert info.value.code == 1


def test_calculate_normals_flat_triangle():
    vertices = [Vector(0.0, 0.0, 0.0), Vector(1.0, 0.0, 0.0), Vector(0.0, 1.0, 0.0)]
    normals = calculate_normals(vertices, [(0, 1, 2)])
    for normal in normals:
        assert list(normal) == pytest.approx([0.0, 0.0, 1.0])


def test_unused_vertex_normal_stays_zero():
    vertices = [Vector(0.0, 0.0, 0.0), Vector(1.0, 0.0, 0.0), Vector(0.0, 1.0, 0.0),
                Vector(5.0, 5.0, 5.0)]
    normals = calculate_normals(vertices, [(0, 1, 2)])
    assert normals[3].norm() == 0


def test_spherical_coords_in_unit_range():
    vertices = [Vector(1.0, 0.0, 0.0), Vector(0.0, 1.0, 0.0), Vector(-0.5, -0.5, 0.5)]
    coords = spherical_texture_coords(vertices)
    assert len(coords) == len(vertices)
    assert all(0.0 <= c <= 1.0 for uv in coords for c in uv)
    assert coords[1].y == pytest.approx(1.0)


def test_cylindrical_coords_in_unit_range():
    vertices = [Vector(1.0, -1.0, 0.0), Vector(0.0, 1.0, -1.0)]
    coords = cylindrical_texture_coords(vertices)
    assert all(0.0 <= c <= 1.0 for uv in coords for c in uv)
    assert coords[0].y == pytest.approx(0.0)


def test_planar_coords_span():
    vertices = [Vector(-1.0, -1.0, 0.0), Vector(1.0, 1.0, 0.0)]
    coords = planar_texture_coords(vertices)
    assert list(coords[0]) == pytest.approx([0.0, 0.0])
    assert list(coords[1]) == pytest.approx([1.0, 1.0])
    assert not math.isnan(coords[0].x)