from trade_dash import paths as P


def test_paths_exist_and_writable():
    P.ensure_dirs()
    assert P.REPO_ROOT.exists()
    assert (P.SRC_DIR / "trade_dash").is_dir()
    for p in (P.DATA_RAW, P.OUTPUTS):
        assert p.exists()
        assert p.is_dir()
