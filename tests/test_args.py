import dataclasses

import pytest

from typescript_starter import __version__
from typescript_starter.args import FLAG_DEFAULTS, resolve_config
from typescript_starter.config import (
    DEFAULT_REPO_URL,
    Config,
    ConfigSource,
    RepoInfo,
    Runner,
    get_repo_info,
    validate_name,
)
from typescript_starter.errors import (
    InvalidNameError,
    MissingInputError,
    OutdatedToolError,
    RegistryLookupError,
    UsageError,
)
from typescript_starter.registry_client import PackageNotFoundError


def latest_is(version):
    return lambda name: version


def source(*args, env=None, interactive=False):
    return ConfigSource(argv=("path/to/python", "path/to/typescript-starter", *args), env=env or {}, interactive=interactive)


FULL_ARGV = [
    "example-project",
    "--appveyor",
    "--description",
    '"example description"',
    "--dom",
    "--node",
    "--strict",
    "--travis",
    "--yarn",
    "--no-circleci",
    "--no-cspell",
    "--no-editorconfig",
    "--no-functional",
    "--no-install",
    "--no-vscode",
]


def test_resolve_config_returns_the_right_options():
    config = resolve_config(source(*FULL_ARGV), fetch_latest=latest_is("1.0.0"))

    assert config == Config(
        project_name="example-project",
        repo=RepoInfo(repo=DEFAULT_REPO_URL, branch=f"v{__version__}"),
        starter_version=__version__,
        runner=Runner.Yarn,
        description="example description",
        appveyor=True,
        circleci=False,
        cspell=False,
        dom_definitions=True,
        editorconfig=False,
        functional=False,
        install=False,
        node_definitions=True,
        strict=True,
        travis=True,
        vscode=False,
    )


def test_positive_toggles_and_defaults():
    config = resolve_config(source("my-lib", "--cspell", "--npm"), fetch_latest=latest_is("1.0.0"))
    assert config.runner is Runner.Npm
    assert config.cspell is True
    assert config.install is True
    assert config.travis is False
    assert config.description == ""


def test_interactive_mode_always_returns_a_complete_config():
    asked = []

    def prompt(partial):
        asked.append(dict(partial))
        return {"project_name": "interactive-project"}

    config = resolve_config(source(interactive=True), prompt=prompt, fetch_latest=latest_is("1.0.0"))

    assert asked == [{}]
    assert config.project_name == "interactive-project"
    assert isinstance(config.starter_version, str)
    for f in dataclasses.fields(Config):
        assert getattr(config, f.name) is not None
    for key, default in FLAG_DEFAULTS.items():
        if isinstance(default, bool):
            assert isinstance(getattr(config, key), bool)


def test_cli_values_take_precedence_over_answers():
    def prompt(partial):
        assert partial["runner"] is Runner.Yarn
        return {"project_name": "answered", "runner": Runner.Npm, "strict": True, "install": True}

    config = resolve_config(
        source("--yarn", "--no-install", interactive=True),
        prompt=prompt,
        fetch_latest=latest_is("1.0.0"),
    )
    assert config.project_name == "answered"
    assert config.runner is Runner.Yarn
    assert config.install is False
    assert config.strict is True


def test_missing_name_without_a_terminal_is_an_error():
    def prompt(partial):
        raise AssertionError("should not prompt")

    with pytest.raises(MissingInputError):
        resolve_config(source("--yarn", interactive=False), prompt=prompt, fetch_latest=latest_is("1.0.0"))


def test_invalid_name_is_rejected():
    with pytest.raises(InvalidNameError):
        resolve_config(source("Not A Name"), fetch_latest=latest_is("1.0.0"))


def test_conflicting_runners_are_a_usage_error():
    with pytest.raises(UsageError):
        resolve_config(source("my-lib", "--npm", "--yarn"), fetch_latest=latest_is("1.0.0"))


def test_version_check_runs_before_anything_else():
    def prompt(partial):
        raise AssertionError("should not prompt")

    with pytest.raises(OutdatedToolError):
        resolve_config(source("Not A Name"), prompt=prompt, fetch_latest=latest_is("9000.0.1"))


def test_registry_failure_aborts_resolution():
    def fetch(name):
        raise PackageNotFoundError("404")

    with pytest.raises(RegistryLookupError, match="could not be found"):
        resolve_config(source("my-lib"), fetch_latest=fetch)


def test_config_is_immutable():
    config = resolve_config(source("my-lib"), fetch_latest=latest_is("1.0.0"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.strict = True  # type: ignore[misc]
    updated = config.with_inferred(github_username="octocat")
    assert updated.github_username == "octocat"
    assert config.github_username != "octocat"


@pytest.mark.parametrize("name", ["package-name", "package-name-2", "@example/package-name-2"])
def test_accepts_valid_package_names(name):
    assert validate_name(name)


@pytest.mark.parametrize(
    "name",
    ["", "Package-Name", "package name", "-leading", "@scope", "@/name", "a/b", "x" * 215, "name!"],
)
def test_rejects_invalid_package_names(name):
    assert not validate_name(name)


def test_repo_info_defaults_without_overrides():
    assert get_repo_info("9000.0.1", {}) == RepoInfo(repo=DEFAULT_REPO_URL, branch="v9000.0.1")


def test_repo_info_url_override_uses_master():
    env = {"TYPESCRIPT_STARTER_REPO_URL": "https://another/repo"}
    assert get_repo_info("9000.0.1", env) == RepoInfo(repo="https://another/repo", branch="master")


def test_repo_info_url_and_branch_override():
    env = {"TYPESCRIPT_STARTER_REPO_URL": "https://another/repo", "TYPESCRIPT_STARTER_REPO_BRANCH": "test"}
    assert get_repo_info("9000.0.1", env) == RepoInfo(repo="https://another/repo", branch="test")


def test_branch_override_alone_is_ignored():
    env = {"TYPESCRIPT_STARTER_REPO_BRANCH": "test"}
    assert get_repo_info("9000.0.1", env) == RepoInfo(repo=DEFAULT_REPO_URL, branch="v9000.0.1")


def test_resolve_config_reads_repo_overrides_from_source_env():
    env = {"TYPESCRIPT_STARTER_REPO_URL": "https://another/repo"}
    config = resolve_config(source("my-lib", env=env), fetch_latest=latest_is("1.0.0"))
    assert config.repo == RepoInfo(repo="https://another/repo", branch="master")
