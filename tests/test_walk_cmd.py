import pytest
from typer.testing import CliRunner

from streamkit.cmd.walk import app
from streamkit.Config import WalkConfig
from streamkit.walker import DirectoryWalker

runner = CliRunner()

@pytest.fixture
def files_dir(tmp_path):
    root = tmp_path / "files"
    (root / "sub").mkdir(parents=True)
    (root / "text.txt").write_text("a")
    (root / "sub" / "sub.txt").write_text("b")
    return root

def lines(result):
    return [l for l in result.stdout.split('\n') if l]

def test_walk(files_dir):
    result = runner.invoke(app, [str(files_dir)])
    assert result.exit_code == 0, result.output
    out = lines(result)
    # the root lists text.txt before descending, sub comes after its contents
    assert out == [str(files_dir / "text.txt"),
                   str(files_dir / "sub" / "sub.txt"),
                   str(files_dir / "sub")]

def test_walk_files_glob(files_dir):
    result = runner.invoke(app, [str(files_dir), "--glob", "*.txt",
                                 "--kind", "files"])
    assert result.exit_code == 0, result.output
    assert set(lines(result)) == {str(files_dir / "text.txt"),
                                  str(files_dir / "sub" / "sub.txt")}

def test_walk_no_prune(files_dir):
    result = runner.invoke(app, [str(files_dir), "-g", "sub.txt", "--no-prune"])
    assert result.exit_code == 0, result.output
    assert lines(result) == [str(files_dir / "sub" / "sub.txt")]

def test_walk_limit(files_dir):
    result = runner.invoke(app, [str(files_dir), "--limit", "1"])
    assert result.exit_code == 0, result.output
    assert len(lines(result)) == 1

def test_walk_config(files_dir, tmp_path):
    cfgname = tmp_path / "walk.yaml"
    WalkConfig(root=files_dir, kind='directories').save(cfgname)
    result = runner.invoke(app, ["--config", str(cfgname)])
    assert result.exit_code == 0, result.output
    assert lines(result) == [str(files_dir / "sub")]

    # explicit options win over the file
    result = runner.invoke(app, ["--config", str(cfgname), "--kind", "files",
                                 "--glob", "text*"])
    assert result.exit_code == 0, result.output
    assert lines(result) == [str(files_dir / "text.txt")]

def test_walk_missing_root(tmp_path):
    result = runner.invoke(app, [str(tmp_path / "nope")])
    assert result.exit_code == 1

def test_walk_needs_root():
    result = runner.invoke(app, [])
    assert result.exit_code != 0

def test_walk_bad_kind(files_dir):
    result = runner.invoke(app, [str(files_dir), "--kind", "sockets"])
    assert result.exit_code != 0

@pytest.fixture
def opened_walkers(monkeypatch):
    walkers = []
    real_open = DirectoryWalker._open
    def recording_open(self, node):
        if self not in walkers:
            walkers.append(self)
        real_open(self, node)
    monkeypatch.setattr(DirectoryWalker, "_open", recording_open)
    return walkers

@pytest.mark.parametrize("kind", ["all", "files", "directories"])
def test_walk_limit_closes_listing(files_dir, opened_walkers, kind):
    result = runner.invoke(app, [str(files_dir), "--kind", kind, "--limit", "1"])
    assert result.exit_code == 0, result.output
    assert len(lines(result)) == 1
    assert len(opened_walkers) == 1
    # stopped part way, so only an explicit close ends the walk
    assert opened_walkers[0].closed

def test_walk_kind_rejects_no_prune(files_dir):
    for kind in ("files", "directories"):
        result = runner.invoke(app, [str(files_dir), "--kind", kind,
                                     "--no-prune"])
        assert result.exit_code != 0
    result = runner.invoke(app, [str(files_dir), "--kind", "all", "--no-prune"])
    assert result.exit_code == 0, result.output

def test_walk_help_lists_kinds():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for kind in ("all", "files", "directories"):
        assert kind in result.output
