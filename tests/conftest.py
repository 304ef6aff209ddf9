import pytest

import archive_config

@pytest.fixture
def dev_home(tmp_path):
    """A development directory with a couple of projects and a gist."""
    home = tmp_path / "development"
    for name in ("alpha", "beta"):
        (home / "project" / name).mkdir(parents=True)
        (home / "project" / name / "README").write_text(name)
    (home / "gist" / "snippet").mkdir(parents=True)
    (home / "project" / "notes.txt").write_text("not a project")
    return home

class FakeTar:
    """Stands in for subprocess.run, writing whatever tar was asked to create."""

    def __init__(self, returncode=0, fail_for=()):
        self.returncode = returncode
        self.fail_for = fail_for
        self.commands = []

    def __call__(self, command, **kwargs):
        self.commands.append(command)
        target = next(arg[len("--file="):] for arg in command if arg.startswith("--file="))
        with open(target, 'w') as f:
            f.write(" ".join(command))
        returncode = 2 if command[-1] in self.fail_for else self.returncode
        return type("Completed", (), {'returncode': returncode})()

@pytest.fixture
def fake_tar(monkeypatch):
    tar = FakeTar()
    monkeypatch.setattr("archive.subprocess.run", tar)
    return tar

@pytest.fixture
def no_user_config(monkeypatch, tmp_path):
    monkeypatch.setattr(archive_config, "DEFAULT_CONFIG_FILES",
                        [str(tmp_path / "no-such-config.yaml")])
    monkeypatch.delenv("DEV_HOME", raising=False)
