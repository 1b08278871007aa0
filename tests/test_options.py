import numpy as np
import pytest

from prdf.configuration import Configuration
from prdf.errors import OptionError
from prdf.options import apply_options, parse_option


def test_parse_option():
    assert parse_option("duplicate 2 2 1") == ("duplicate", ["2", "2", "1"])
    assert parse_option("-wrap") == ("wrap", [])
    assert parse_option(["scale", 2]) == ("scale", ["2"])


def test_wrap_leaves_input_untouched():
    config = Configuration(10.0 * np.eye(3), [[11.0, -1.0, 5.0]], [1])
    wrapped = apply_options(["wrap"], config)
    assert np.allclose(wrapped.pos, [[1.0, 9.0, 5.0]])
    assert np.allclose(config.pos, [[11.0, -1.0, 5.0]])


def test_duplicate(cscl_config):
    big = apply_options(["duplicate 2 1 3"], cscl_config)
    assert big.N == cscl_config.N * 6
    assert big.volume() == pytest.approx(cscl_config.volume() * 6)
    assert big.species_count(11) == 8 * 6


def test_remove_and_select_species(cscl_config):
    no_cl = apply_options(["remove-species Cl"], cscl_config)
    assert set(no_cl.numbers) == {11}
    only_cl = apply_options(["select-species Cl"], cscl_config)
    assert set(only_cl.numbers) == {17}
    assert only_cl.N == 8


def test_scale_keeps_fractional_coordinates(cscl_config):
    scaled = apply_options(["scale 2"], cscl_config)
    assert scaled.volume() == pytest.approx(8.0 * cscl_config.volume())
    assert np.allclose(scaled.pos, 2.0 * cscl_config.pos)


def test_options_apply_in_order(cscl_config):
    config = apply_options(["select-species Na", "duplicate 2 2 2"], cscl_config)
    assert config.N == 64


@pytest.mark.parametrize(
    "option",
    [
        "bogus",
        "",
        "duplicate 2 2",
        "duplicate 0 1 1",
        "duplicate 1.5 1 1",
        "scale -1",
        "scale a",
        "remove-species",
        "remove-species Xx",
        "wrap now",
    ],
)
def test_bad_options_raise(option, cscl_config):
    with pytest.raises(OptionError):
        apply_options([option], cscl_config)
