import os

from prdf.cli import main
from prdf.utils import load_two_column_file, write_xyz


def write_list(tmp_path, config, n=2):
    names = []
    for k in range(n):
        path = tmp_path / f"conf{k}.xyz"
        write_xyz(config, str(path))
        names.append(path.name)
    listfile = tmp_path / "list.txt"
    listfile.write_text("\n".join(names + ["absent.xyz"]) + "\n")
    return str(listfile)


def test_cli_writes_tables(tmp_path, cscl_config):
    listfile = write_list(tmp_path, cscl_config)
    outdir = tmp_path / "out"
    status = main([
        listfile, "--rmax", "4", "--dr", "0.25", "--outdir", str(outdir),
        "--no-progress", "--plot", str(tmp_path / "rdf.png"), "-q",
    ])
    assert status == 0
    assert sorted(os.listdir(outdir)) == [
        "rdf_ClCl.dat", "rdf_NaCl.dat", "rdf_NaNa.dat", "rdf_total.dat"
    ]
    assert os.path.exists(tmp_path / "rdf.png")
    r, _ = load_two_column_file(str(outdir / "rdf_total.dat"))
    assert r.size == 17


def test_cli_refuses_existing_output_without_overwrite(tmp_path, cscl_config):
    listfile = write_list(tmp_path, cscl_config)
    args = [listfile, "--rmax", "4", "--dr", "0.25", "--outdir", str(tmp_path), "-q"]
    assert main(args) == 0
    assert main(args) == 1
    assert main(args + ["--overwrite"]) == 0


def test_cli_fatal_errors(tmp_path, cscl_config):
    assert main([str(tmp_path / "nolist.txt"), "--rmax", "4", "--dr", "0.25", "-q"]) == 1

    listfile = write_list(tmp_path, cscl_config)
    assert main([listfile, "--rmax", "4", "--dr", "0.25", "--option", "bogus",
                 "--outdir", str(tmp_path / "out"), "-q"]) == 1
    assert not os.path.exists(tmp_path / "out")
    assert main([listfile, "--rmax", "4", "--dr", "-1", "-q"]) == 1


def test_cli_options_and_workers(tmp_path, cscl_config):
    listfile = write_list(tmp_path, cscl_config, n=1)
    outdir = tmp_path / "out"
    status = main([
        listfile, "--rmax", "4", "--dr", "0.25", "--outdir", str(outdir),
        "--option", "select-species Na", "--option", "wrap",
        "--workers", "2", "--no-progress", "-q",
    ])
    assert status == 0
    assert os.listdir(outdir) == ["rdf_total.dat"]
