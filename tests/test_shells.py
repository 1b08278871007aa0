import numpy as np

from prdf.configuration import Configuration
from prdf.geometry import periodic_range, replica_translations
from prdf.neighborlist import NeighborList
from prdf.shells import ShellCounter, bin_distances, self_image_distances, shell_index


def make_counter(config, r_max, dr, n_steps=None):
    if n_steps is None:
        n_steps = int(np.floor(r_max / dr + 0.5)) + 2
    cutoff = r_max + 1.1 * dr
    shifts = replica_translations(config.cell, periodic_range(config.cell, cutoff))
    nl = NeighborList(cutoff, config.pos, config.cell)
    return ShellCounter(config, nl, shifts, dr, n_steps)


def test_shell_index_lower_edge_inclusive():
    assert shell_index([1.0], 0.25).tolist() == [4]
    assert shell_index([0.99999], 0.25).tolist() == [3]
    assert shell_index([0.0], 0.25).tolist() == [0]


def test_shell_index_follows_edge_comparisons():
    dr = 0.1
    d = np.array([3.0, 0.3, 0.7])
    j = shell_index(d, dr)
    assert np.all(d >= j * dr)
    assert np.all(d < j * dr + dr)


def test_bin_distances_drops_out_of_range():
    counts = bin_distances([0.1, 0.3, 0.3, 5.0], 0.25, 4)
    assert counts.tolist() == [1, 2, 0, 0]


def test_self_image_distances_exclude_zero():
    shifts = replica_translations(2.0 * np.eye(3), [(-1, 1)] * 3)
    d = self_image_distances(shifts)
    assert d.size == 26
    assert d.min() == 2.0


def test_single_atom_sees_its_periodic_images(single_atom_config):
    counter = make_counter(single_atom_config, r_max=4.0, dr=0.25)
    counts = counter.count(29, 29)
    assert counts.size == 18
    assert counts[:12].sum() == 0
    # 6 images at 3 Å, 12 at 3*sqrt(2) = 4.24 Å
    assert counts[12] == 6
    assert counts[16] == 12
    assert counts[17] == 0


def test_simple_cubic_first_shell_has_six_neighbors(sc_config):
    counter = make_counter(sc_config, r_max=4.0, dr=0.25)
    counts = counter.count(29, 29)
    assert counts[:12].sum() == 0
    assert counts[12] == 6 * sc_config.N
    assert counts[16] == 12 * sc_config.N


def test_distance_on_shell_edge_goes_to_upper_shell():
    config = Configuration(20.0 * np.eye(3), [[5.0, 5.0, 5.0], [6.0, 5.0, 5.0]], [1, 1])
    counter = make_counter(config, r_max=2.0, dr=0.25)
    counts = counter.count(1, 1)
    assert counts[3] == 0
    assert counts[4] == 2
    assert counts.sum() == 2


def test_only_species_b_is_counted(cscl_config):
    counter = make_counter(cscl_config, r_max=4.0, dr=0.25)
    na_cl = counter.count(11, 17)
    na_na = counter.count(11, 11)
    # 8 Cl at 2*sqrt(3) = 3.46 Å around each of the 8 Na
    assert na_cl[13] == 64
    assert na_na[13] == 0
    # 6 Na at 4 Å around each Na
    assert na_na[16] == 48
    assert na_cl[16] == 0


def test_missing_species_gives_zero_counts(cscl_config):
    counter = make_counter(cscl_config, r_max=4.0, dr=0.25)
    assert counter.count(11, 26).sum() == 0
    assert counter.count(26, 11).sum() == 0


def test_threaded_counts_match_serial(random_config):
    counter = make_counter(random_config, r_max=5.0, dr=0.2)
    serial = counter.count(8, 14, workers=1)
    threaded = counter.count(8, 14, workers=3)
    assert np.array_equal(serial, threaded)
    assert serial.sum() > 0


def test_count_with_progress_bar(random_config):
    counter = make_counter(random_config, r_max=3.0, dr=0.5)
    quiet = counter.count(14, 14)
    shown = counter.count(14, 14, workers=2, progress=True, desc="Si-Si")
    assert np.array_equal(quiet, shown)
