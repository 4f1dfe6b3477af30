"""Unit tests for the target resolver."""

import itertools
from unittest.mock import MagicMock

import pytest

from smart_terminal.config import InMemoryPreferenceStore
from smart_terminal.environments import EnvironmentCategory
from smart_terminal.errors import NoUsableEnvironment
from smart_terminal.routing import TargetResolver

SAMPLE_COMMANDS = [
    "git status",
    "npm install",
    "python -m pytest",
    "sudo apt update",
    "docker ps",
    "./run.sh",
    r"C:\tools\thing.exe",
    "frobnicate",
    "",
    "   ",
    "wsl --list",
]


@pytest.fixture
def resolver():
    return TargetResolver(InMemoryPreferenceStore())


class TestBuiltinRouting:
    """Resolution without user overrides."""

    @pytest.mark.parametrize(
        "command,expected",
        [
            ("git status", "Git Bash"),
            ("npm install", "PowerShell"),
            ("pip install requests", "Command Prompt"),
            ("sudo apt-get install jq", "WSL"),
            ("kubectl get pods", "PowerShell"),
            ("ls -la", "Git Bash"),
            ("tasklist", "Command Prompt"),
        ],
    )
    def test_builtin_table(self, resolver, windows_environments, command, expected):
        chosen = resolver.resolve(command, windows_environments)
        assert chosen.identity == expected

    def test_unknown_unix_path_prefers_bash(self, resolver, windows_environments):
        assert resolver.resolve("./scripts/build", windows_environments).identity == "Git Bash"

    def test_unknown_windows_path_prefers_cmd(self, resolver, windows_environments):
        chosen = resolver.resolve(r"C:\tools\thing.exe --flag", windows_environments)
        assert chosen.identity == "Command Prompt"

    def test_unknown_command_prefers_powershell(self, resolver, windows_environments):
        assert resolver.resolve("frobnicate", windows_environments).identity == "PowerShell"

    def test_empty_command_treated_as_unknown(self, windows_environments):
        """The empty class never consults the store and uses the default policy."""
        store = MagicMock()
        store.get_default_environment_name.return_value = "PowerShell"
        resolver = TargetResolver(store)

        result = resolver.resolve_with_reason("   ", windows_environments)

        assert result.chosen.identity == "PowerShell"
        assert result.rule_source == "default_policy"
        store.get_rule.assert_not_called()

    def test_custom_rule_table(self, windows_environments):
        """The rule table is injectable."""
        resolver = TargetResolver(
            InMemoryPreferenceStore(), rules={"git": EnvironmentCategory.WSL}
        )
        assert resolver.resolve("git status", windows_environments).identity == "WSL"


class TestOverrides:
    """User override rules."""

    def test_bash_override_ignores_catalog_order(self, make_env):
        """A name containing 'bash' selects the bash environment wherever it sits."""
        usable_orders = [
            [
                make_env("A", EnvironmentCategory.POWERSHELL),
                make_env("B", EnvironmentCategory.BASH),
            ],
            [
                make_env("B", EnvironmentCategory.BASH),
                make_env("A", EnvironmentCategory.POWERSHELL),
            ],
        ]
        resolver = TargetResolver(InMemoryPreferenceStore({"git": "My Bash Shell"}))

        for usable in usable_orders:
            assert resolver.resolve("git status", usable).identity == "B"

    def test_override_beats_builtin(self, windows_environments):
        resolver = TargetResolver(InMemoryPreferenceStore({"npm": "CMD"}))
        result = resolver.resolve_with_reason("npm test", windows_environments)

        assert result.chosen.identity == "Command Prompt"
        assert result.rule_source == "override"
        assert result.preferred_category == EnvironmentCategory.CMD

    def test_override_keys_normalized(self, windows_environments):
        """Rule keys written like commands still match their class."""
        resolver = TargetResolver(InMemoryPreferenceStore({"Docker.exe": "WSL"}))
        assert resolver.resolve("docker ps", windows_environments).identity == "WSL"

    def test_override_prefers_exact_identity_within_category(self, make_env):
        """Naming a specific terminal picks it over an earlier one of the same kind."""
        usable = [
            make_env("Git Bash", EnvironmentCategory.BASH),
            make_env("Git Bash (x86)", EnvironmentCategory.BASH),
        ]
        resolver = TargetResolver(InMemoryPreferenceStore({"git": "git bash (x86)"}))
        assert resolver.resolve("git log", usable).identity == "Git Bash (x86)"

    def test_unmatched_override_selects_named_custom(self, make_env, windows_environments):
        """Free text that matches no keyword resolves to custom environments."""
        usable = windows_environments + [
            make_env("Kitty", EnvironmentCategory.CUSTOM),
            make_env("Alacritty", EnvironmentCategory.CUSTOM),
        ]
        resolver = TargetResolver(InMemoryPreferenceStore({"htop": "Alacritty"}))
        assert resolver.resolve("htop", usable).identity == "Alacritty"

    def test_unmatched_override_without_custom_falls_back(self, windows_environments):
        """No custom environment means the default environment is used."""
        resolver = TargetResolver(
            InMemoryPreferenceStore({"htop": "Alacritty"}, default_environment="WSL")
        )
        result = resolver.resolve_with_reason("htop", windows_environments)

        assert result.chosen.identity == "WSL"
        assert result.preferred_category == EnvironmentCategory.CUSTOM
        assert result.fallback == "default_environment"

    def test_store_read_on_every_call(self, windows_environments):
        """Edits to the store apply to the next resolution."""
        store = InMemoryPreferenceStore()
        resolver = TargetResolver(store)
        assert resolver.resolve("git status", windows_environments).identity == "Git Bash"

        store.rules["git"] = "WSL"
        assert resolver.resolve("git status", windows_environments).identity == "WSL"


class TestFallbacks:
    """Availability-based fallback."""

    def test_default_environment_when_preferred_missing(self, make_env):
        usable = [
            make_env("PowerShell", EnvironmentCategory.POWERSHELL),
            make_env("Command Prompt", EnvironmentCategory.CMD),
        ]
        resolver = TargetResolver(
            InMemoryPreferenceStore(default_environment="Command Prompt")
        )
        result = resolver.resolve_with_reason("git status", usable)

        assert result.chosen.identity == "Command Prompt"
        assert result.fallback == "default_environment"

    def test_default_name_is_exact_match(self, make_env):
        """The default environment name must match identity exactly."""
        usable = [
            make_env("Command Prompt", EnvironmentCategory.CMD),
            make_env("PowerShell", EnvironmentCategory.POWERSHELL),
        ]
        resolver = TargetResolver(
            InMemoryPreferenceStore(default_environment="powershell")
        )
        result = resolver.resolve_with_reason("git status", usable)

        assert result.chosen.identity == "Command Prompt"
        assert result.fallback == "first_available"

    def test_only_custom_environment(self, make_env):
        """Unknown command with only a custom terminal walks every fallback."""
        custom = make_env("My Term", EnvironmentCategory.CUSTOM)
        resolver = TargetResolver(InMemoryPreferenceStore())

        result = resolver.resolve_with_reason("unknown-tool", [custom])

        assert result.chosen is custom
        assert result.rule_source == "default_policy"
        assert result.preferred_category == EnvironmentCategory.POWERSHELL
        assert result.fallback == "first_available"

    def test_empty_usable_raises(self, resolver):
        with pytest.raises(NoUsableEnvironment) as exc_info:
            resolver.resolve("git status", [])

        assert exc_info.value.command == "git status"
        assert "No usable terminal" in str(exc_info.value)

    def test_empty_usable_raises_with_reason(self, resolver):
        with pytest.raises(NoUsableEnvironment):
            resolver.resolve_with_reason("", [])


class TestResolutionProperties:
    """Closure and determinism over many inputs."""

    def test_result_always_from_input(self, resolver, windows_environments):
        for size in range(1, len(windows_environments) + 1):
            for usable in itertools.permutations(windows_environments, size):
                for command in SAMPLE_COMMANDS:
                    chosen = resolver.resolve(command, list(usable))
                    assert any(chosen is env for env in usable)

    def test_deterministic(self, resolver, windows_environments):
        for command in SAMPLE_COMMANDS:
            first = resolver.resolve(command, windows_environments)
            for _ in range(5):
                assert resolver.resolve(command, windows_environments) is first


class TestExplain:
    """Test explain() and requires_specific_environment()."""

    def test_templates_by_class(self, resolver, make_env):
        env = make_env("Git Bash", EnvironmentCategory.BASH)

        assert resolver.explain("git push", env) == "Git Bash is the best fit for Git commands"
        assert "Node.js" in resolver.explain("yarn build", env)
        assert "Python" in resolver.explain("pip list", env)
        assert "container" in resolver.explain("docker ps", env)
        assert "Linux" in resolver.explain("wsl", env)

    def test_generic_template(self, resolver, make_env):
        env = make_env("PowerShell", EnvironmentCategory.POWERSHELL)
        assert resolver.explain("frobnicate", env) == (
            "PowerShell is a suitable choice for this command"
        )

    def test_explanation_independent_of_fallback(self, make_env):
        """The git template is used even when git fell back to another terminal."""
        usable = [make_env("PowerShell", EnvironmentCategory.POWERSHELL)]
        resolver = TargetResolver(InMemoryPreferenceStore())
        result = resolver.resolve_with_reason("git status", usable)

        assert result.fallback == "default_environment"
        assert result.justification == "PowerShell is the best fit for Git commands"

    @pytest.mark.parametrize(
        "command,expected",
        [
            ("sudo apt install curl", True),
            ("bash -c 'echo hi'", True),
            ("wsl.exe", True),
            ("git status", False),
            ("", False),
        ],
    )
    def test_requires_specific_environment(self, resolver, command, expected):
        assert resolver.requires_specific_environment(command) is expected

    def test_requires_specific_does_not_change_resolution(self, resolver, make_env):
        usable = [make_env("PowerShell", EnvironmentCategory.POWERSHELL)]
        assert resolver.requires_specific_environment("apt update")
        assert resolver.resolve("apt update", usable).identity == "PowerShell"
