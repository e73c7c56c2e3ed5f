from pathlib import Path

from typer.testing import CliRunner

from gcrun.cli.main import app
from gcrun.sdk.base import StrategyBase


JOBS = Path(__file__).parent / "jobs"
runner = CliRunner()


class AlwaysZero(StrategyBase):
    def weighted_sum(self, sequence, table):
        return 0


def test_compute():
    result = runner.invoke(app, ["compute", "GCGC", "ATAT", "GCZ"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines == ["GCGC\t1.0", "ATAT\t0.0", f"GCZ\t{2 / 3!r}"]


def test_compute_with_strategy():
    result = runner.invoke(app, ["compute", "--strategy", "numpy", "nnnn"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "nnnn\t0.5"


def test_compute_unknown_strategy():
    result = runner.invoke(app, ["compute", "--strategy", "bogus", "GC"])
    assert result.exit_code == 1


def test_compile_run_show(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    job = str(JOBS / "sample.yaml")

    compiled = runner.invoke(app, ["compile", job])
    assert compiled.exit_code == 0
    assert compiled.stdout.splitlines()[0] == "Plan compiled."

    ran = runner.invoke(app, ["run", job, "--workers", "2"])
    assert ran.exit_code == 0
    digest = ran.stdout.strip()
    assert (tmp_path / ".gcrun" / "artifacts" / f"{digest}.json").exists()

    shown = runner.invoke(app, ["show", digest])
    assert shown.exit_code == 0
    assert '"job_id": "sample"' in shown.stdout


def test_verify_ok():
    result = runner.invoke(app, ["verify", str(JOBS / "sample.yaml")])
    assert result.exit_code == 0
    assert result.stdout.strip() == "ok"


def test_verify_mismatch(tmp_path):
    job = tmp_path / "bad.yaml"
    job.write_text(f"job_id: bad\nsequences:\n  a: GCGC\nstrategies: [scan, '{__name__}:AlwaysZero']\n")
    result = runner.invoke(app, ["verify", str(job)])
    assert result.exit_code == 1


def test_invalid_job(tmp_path):
    job = tmp_path / "invalid.yaml"
    job.write_text("job_id: x\n")
    result = runner.invoke(app, ["run", str(job)])
    assert result.exit_code == 1


def test_show_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["show", "deadbeef"])
    assert result.exit_code == 1


def test_run_rejects_non_positive_workers(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for workers in ["0", "-2"]:
        result = runner.invoke(app, ["run", str(JOBS / "sample.yaml"), "--workers", workers])
        assert result.exit_code != 0
        assert not isinstance(result.exception, ValueError)
    assert not (tmp_path / ".gcrun").exists()


def test_run_with_large_scale_weights(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    job = tmp_path / "tiny.yaml"
    job.write_text("job_id: tiny\nsequences:\n  a: GX\nweights:\n  X: '1e-20'\nstrategies: [numpy]\n")
    result = runner.invoke(app, ["run", str(job)])
    assert result.exit_code == 0
    assert len(result.stdout.strip()) == 64

    shown = runner.invoke(app, ["show", result.stdout.strip()])
    assert shown.exit_code == 0
    assert '"weighted_sum": "300000000000000000003"' in shown.stdout
