import json

import pytest
from typer.testing import CliRunner

from credits_tracker.cli import app
from credits_tracker.exceptions import NotAVersionControlRootError

runner = CliRunner()


@pytest.fixture
def mock_history(mocker, fake_history):
    """Replace git with canned commit authors."""
    history = fake_history(["Jane Doe", "jane doe", "Bob"])
    mocker.patch("credits_tracker.aggregator.GitHistory", return_value=history)
    return history


def test_gen_command(xcode_workspace, tmp_path, mock_history):
    """Test the gen command writes acknowledgements.json into a directory."""
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    result = runner.invoke(
        app,
        [
            "gen",
            "--app-name",
            "MyApp",
            "--workspace",
            str(xcode_workspace),
            "--output",
            str(out_dir),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Generated:" in result.stdout

    data = json.loads((out_dir / "acknowledgements.json").read_text())
    assert data["application"] == "MyApp"
    assert [p["name"] for p in data["packages"]] == ["Alamofire", "swift-log"]
    assert data["contributors"] == [
        {"name": "Bob", "contributions": 1},
        {"name": "Jane Doe", "contributions": 2},
    ]


def test_gen_markdown_with_alias(tmp_path, mock_history):
    output = tmp_path / "CREDITS.md"

    result = runner.invoke(
        app,
        [
            "gen",
            "-n",
            "MyApp",
            "-w",
            str(tmp_path),
            "-o",
            str(output),
            "--format",
            "markdown",
            "--alias",
            "Bob=Bob Stone",
        ],
    )

    assert result.exit_code == 0, result.output
    content = output.read_text()
    assert "- Bob Stone" in content
    assert "- Jane Doe" in content


def test_gen_reads_config_file(tmp_path, mock_history):
    (tmp_path / ".credits-tracker.toml").write_text(
        'app_name = "Configured"\noutput = "credits.json"\n'
    )

    result = runner.invoke(app, ["gen", "--workspace", str(tmp_path)])

    assert result.exit_code == 0, result.output
    data = json.loads((tmp_path / "credits.json").read_text())
    assert data["application"] == "Configured"


def test_gen_missing_workspace(tmp_path, mock_history):
    missing = tmp_path / "missing"

    result = runner.invoke(
        app, ["gen", "-n", "MyApp", "-w", str(missing), "-o", str(tmp_path)]
    )

    assert result.exit_code == 1
    assert "Path not found" in result.output
    assert list(tmp_path.iterdir()) == []


def test_gen_requires_app_name(tmp_path, mock_history):
    result = runner.invoke(app, ["gen", "-w", str(tmp_path), "-o", str(tmp_path)])

    assert result.exit_code == 1
    assert "Missing application name" in result.output


def test_gen_not_a_repository(tmp_path, mocker, fake_history):
    mocker.patch(
        "credits_tracker.aggregator.GitHistory",
        return_value=fake_history(error=NotAVersionControlRootError(tmp_path)),
    )

    result = runner.invoke(app, ["gen", "-n", "MyApp", "-w", str(tmp_path), "-o", str(tmp_path)])

    assert result.exit_code == 1
    assert "Not a git repository" in result.output
    assert "--allow-missing-history" in result.output
    assert not (tmp_path / "acknowledgements.json").exists()


def test_gen_allow_missing_history(tmp_path, mocker, fake_history):
    mocker.patch(
        "credits_tracker.aggregator.GitHistory",
        return_value=fake_history(error=NotAVersionControlRootError(tmp_path)),
    )

    result = runner.invoke(
        app,
        ["gen", "-n", "MyApp", "-w", str(tmp_path), "-o", str(tmp_path), "--allow-missing-history"],
    )

    assert result.exit_code == 0, result.output
    data = json.loads((tmp_path / "acknowledgements.json").read_text())
    assert data["contributors"] == []


def test_gen_rejects_malformed_alias(tmp_path, mock_history):
    result = runner.invoke(
        app, ["gen", "-n", "MyApp", "-w", str(tmp_path), "--alias", "nobody"]
    )

    assert result.exit_code == 1
    assert "Invalid alias" in result.output


def test_gen_derived_data(tmp_path, xcode_workspace, mock_history):
    """Test that --derived-data scans the app's SourcePackages folder."""
    derived = tmp_path / "DerivedData"
    (derived / "MyApp-abcdef").mkdir(parents=True)
    (xcode_workspace / "SourcePackages").rename(derived / "MyApp-abcdef" / "SourcePackages")
    project = tmp_path / "project"
    project.mkdir()

    result = runner.invoke(
        app,
        [
            "gen",
            "-n",
            "MyApp",
            "-w",
            str(project),
            "-o",
            str(project),
            "--derived-data",
            "--derived-data-path",
            str(derived),
        ],
    )

    assert result.exit_code == 0, result.output
    data = json.loads((project / "acknowledgements.json").read_text())
    assert [p["name"] for p in data["packages"]] == ["Alamofire", "swift-log"]


def test_packages_command(xcode_workspace):
    result = runner.invoke(app, ["packages", "--workspace", str(xcode_workspace)])

    assert result.exit_code == 0, result.output
    assert "Alamofire" in result.stdout
    assert "Apache-2.0" in result.stdout
    assert "Found 2 packages" in result.stdout


def test_packages_command_empty(tmp_path):
    result = runner.invoke(app, ["packages", "--workspace", str(tmp_path)])

    assert result.exit_code == 0
    assert "No packages found" in result.stdout


def test_contributors_command(tmp_path, mock_history):
    result = runner.invoke(app, ["contributors", "--workspace", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "Jane Doe" in result.stdout
    assert "jane doe" not in result.stdout


def test_contributors_command_keeps_bracketed_names(tmp_path, mocker, fake_history):
    mocker.patch(
        "credits_tracker.aggregator.GitHistory",
        return_value=fake_history(["dependabot[bot]", "github-actions[bot]", "Jane Doe"]),
    )

    result = runner.invoke(app, ["contributors", "--workspace", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "dependabot[bot]" in result.stdout
    assert "github-actions[bot]" in result.stdout


def test_gen_bracketed_workspace_path_fails_cleanly(tmp_path, mock_history):
    workspace = tmp_path / "x[" / "]y"

    result = runner.invoke(app, ["gen", "-n", "MyApp", "-w", str(workspace), "-o", str(tmp_path)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Path not found" in result.output


def test_gen_into_bracketed_directory(tmp_path, mock_history):
    out_dir = tmp_path / "[red]" / "[/]"
    out_dir.mkdir(parents=True)

    result = runner.invoke(app, ["gen", "-n", "MyApp", "-w", str(tmp_path), "-o", str(out_dir)])

    assert result.exit_code == 0, result.output
    assert "Generated:" in result.stdout
    assert (out_dir / "acknowledgements.json").exists()
