import numpy as np
import pytest

from distfield import ConfigurationError, PixelGrid, generate_sdf, load_config, unbounded_cost

from .conftest import brute_force_2d


def test_single_dot_scenario(dot_image):
    result = generate_sdf(dot_image)
    expected = np.array([
        [8, 5, 4, 5, 8],
        [5, 2, 1, 2, 5],
        [4, 1, 0, 1, 4],
        [5, 2, 1, 2, 5],
        [8, 5, 4, 5, 8],
    ], dtype=np.float64)
    np.testing.assert_array_equal(result.squared, expected)
    assert result.field[2, 2] == np.float32(-0.5)
    assert result.quantized[2, 2] == 126
    assert result.field[2, 3] == 1.0
    assert result.quantized[2, 3] == 132
    assert result.quantized[0, 0] == 139


def test_disc_field_sign_and_brute_force(disc_image):
    result = generate_sdf(disc_image)
    np.testing.assert_array_equal(result.squared, brute_force_2d(result.cost))
    assert np.all(result.field[result.inside] < 0)
    assert np.all(result.field[~result.inside] > 0)
    assert result.squared[8, 10] == 26
    assert result.field[8, 10] == -np.float32(np.sqrt(26.0)) - np.float32(0.5)


def test_all_background_saturates():
    result = generate_sdf(np.zeros((6, 7), dtype=np.uint8))
    assert np.all(result.squared == unbounded_cost())
    assert np.all(result.quantized == 255)
    assert not np.isnan(result.field).any()


def test_write_back_into_pitched_grid(dot_image):
    buffer = bytearray([9] * (5 * 8))
    grid = PixelGrid(buffer, width=5, height=5, pitch=8)
    grid.write(dot_image)
    result = generate_sdf(grid, write_back=True)
    np.testing.assert_array_equal(grid.array, result.quantized)
    assert buffer[5:8] == bytearray([9, 9, 9])


def test_threshold_from_config(dot_image):
    result = generate_sdf(dot_image, load_config(overrides=["threshold=255"]))
    assert not result.inside.any()
    assert np.all(result.quantized == 255)


def test_oversized_image_leaves_grid_untouched(dot_image):
    grid = PixelGrid.from_array(dot_image)
    with pytest.raises(ConfigurationError):
        generate_sdf(grid, load_config(overrides=["max_dimension=4"]), write_back=True)
    np.testing.assert_array_equal(grid.array, dot_image)


def test_write_back_into_array(dot_image):
    result = generate_sdf(dot_image, write_back=True)
    np.testing.assert_array_equal(dot_image, result.quantized)
    assert dot_image[2, 2] == 126


def test_write_back_needs_writable_samples(dot_image):
    with pytest.raises(ConfigurationError, match="write_back"):
        generate_sdf(dot_image.tolist(), write_back=True)

    dot_image.flags.writeable = False
    with pytest.raises(ConfigurationError) as excinfo:
        generate_sdf(dot_image, write_back=True)
    assert excinfo.value.stage == "grid"
    assert dot_image[2, 2] == 255


def test_array_is_untouched_without_write_back(dot_image):
    original = dot_image.copy()
    generate_sdf(dot_image)
    np.testing.assert_array_equal(dot_image, original)
