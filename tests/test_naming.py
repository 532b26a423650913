import pytest

from codegen_state.core.utils.ids import generate_nano_id
from codegen_state.core.utils.naming import generate_project_name, slugify


def test_slugify_normalizes_text():
    assert slugify("  Café Résumé!! Builder ") == "cafe-resume-builder"
    assert slugify(None) == ""
    assert slugify("***") == ""


def test_long_seed_is_truncated_to_max_length():
    name = generate_project_name("an extremely long project description", "q9w8e7", 20)

    assert name == "an-extremely-lo-q9w8"
    assert len(name) == 20


def test_truncation_does_not_leave_dangling_hyphen():
    name = generate_project_name("abcdefghijklmno pqr", "1234", 20)

    assert name == "abcdefghijklmno-1234"
    assert "--" not in generate_project_name("abcdefghijklmn opq", "1234", 20)


@pytest.mark.parametrize("seed", [None, "", "!!!"])
def test_empty_seed_falls_back_to_default(seed):
    assert generate_project_name(seed, "abcd", 20) == "project-abcd"


def test_tiny_max_length_still_returns_a_name():
    name = generate_project_name("storefront", "abcd", 4)

    assert name == "stor"


def test_invalid_max_length_is_rejected():
    with pytest.raises(ValueError):
        generate_project_name("x", "abcd", 0)


def test_nano_id_shape():
    token = generate_nano_id()

    assert len(token) == 10
    assert generate_nano_id(21) != generate_nano_id(21)
