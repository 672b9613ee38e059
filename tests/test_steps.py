from __future__ import annotations

import pytest

from gnulinwiz.errors import InvalidInput, SourceUnreadable
from gnulinwiz.lib.command import Privilege
from gnulinwiz.steps import (
    DefaultShellStep,
    FirewallApplyStep,
    FirewallFileStep,
    OhMyZshStep,
    RootConfigStep,
    SoftwareInstallStep,
    UserConfigsStep,
    ZramSwapStep,
    ZshPluginsStep,
)

from .conftest import RecordingRunner, answers


def test_firewall_file_pipes_rules_to_tee(make_ctx, runner, configs_dir):
    assert FirewallFileStep().run(make_ctx()) == 0
    (spec,) = runner.calls
    assert runner.argv_for(spec) == ["sudo", "tee", "/etc/iptables/iptables.rules"]
    assert spec.stdin == (configs_dir / "iptables.rules").read_bytes()
    assert spec.privilege is Privilege.ROOT


def test_firewall_file_missing_source(make_ctx, configs_dir):
    (configs_dir / "iptables.rules").unlink()
    with pytest.raises(SourceUnreadable) as exc:
        FirewallFileStep().run(make_ctx())
    assert exc.value.status == 2


def test_firewall_file_write_failure(make_ctx):
    run = RecordingRunner(fail_on={"tee": 1})
    assert FirewallFileStep().run(make_ctx(run=run)) == 1


def test_firewall_apply_has_no_shell(make_ctx, runner):
    assert FirewallApplyStep().run(make_ctx({"paths": {"iptables_rules": "/tmp/r.rules"}})) == 0
    assert runner.argvs == [["sudo", "iptables-restore", "/tmp/r.rules"]]


def test_software_default_list(make_ctx, runner):
    ctx = make_ctx({"software": {"choice": "default", "packages": ["zsh", "git"]}})
    assert SoftwareInstallStep().run(ctx) == 0
    assert runner.argvs == [["sudo", "pacman", "-Sy", "zsh", "git", "--noconfirm"]]


def test_software_interactive_custom_list(make_ctx, runner):
    ctx = make_ctx(input_fn=answers("0", "htop  neovim"))
    assert SoftwareInstallStep().run(ctx) == 0
    assert runner.argvs == [["sudo", "pacman", "-Sy", "htop", "neovim", "--noconfirm"]]


def test_software_interactive_default_list(make_ctx, runner):
    ctx = make_ctx(input_fn=answers("1"))
    assert SoftwareInstallStep().run(ctx) == 0
    assert runner.argvs[0][:3] == ["sudo", "pacman", "-Sy"]
    assert "firefox" in runner.argvs[0]


def test_software_other_package_manager(make_ctx, runner):
    ctx = make_ctx(
        {
            "software": {
                "choice": "default",
                "packages": ["vim"],
                "package_manager": "apt-get",
                "install_args": ["install", "-y"],
                "trailing_args": [],
            }
        }
    )
    assert SoftwareInstallStep().run(ctx) == 0
    assert runner.argvs == [["sudo", "apt-get", "install", "-y", "vim"]]


def test_software_empty_custom_list(make_ctx, runner):
    with pytest.raises(InvalidInput):
        SoftwareInstallStep().run(make_ctx(input_fn=answers("0", "   ")))
    assert runner.calls == []


def test_software_failure_status(make_ctx):
    run = RecordingRunner(fail_on={"pacman": 1})
    ctx = make_ctx({"software": {"choice": "default"}}, run=run)
    assert SoftwareInstallStep().run(ctx) == 1


def test_default_shell_for_user_and_root(make_ctx, runner):
    assert DefaultShellStep().run(make_ctx()) == 0
    assert runner.argvs == [
        ["sudo", "chsh", "-s", "/usr/bin/zsh", "alice"],
        ["sudo", "chsh", "-s", "/usr/bin/zsh", "root"],
    ]


def test_default_shell_stops_on_failure(make_ctx):
    run = RecordingRunner(fail_on={"chsh": 1})
    assert DefaultShellStep().run(make_ctx(run=run)) == 1
    assert len(run.calls) == 1


def test_oh_my_zsh_skipped_when_present(make_ctx, runner, home):
    (home / ".oh-my-zsh").mkdir()
    assert OhMyZshStep().run(make_ctx()) == 0
    assert runner.calls == []


def test_oh_my_zsh_downloads_and_pipes_script(make_ctx):
    run = RecordingRunner(stdout="echo installing\n")
    assert OhMyZshStep().run(make_ctx(run=run)) == 0
    curl, sh = run.calls
    assert curl.program == "curl" and curl.privilege is Privilege.USER
    assert sh.args == ("-s", "--", "--unattended")
    assert sh.stdin == b"echo installing\n"


def test_oh_my_zsh_download_failure(make_ctx):
    run = RecordingRunner(fail_on={"curl": 22})
    assert OhMyZshStep().run(make_ctx(run=run)) == 1
    assert [c.program for c in run.calls] == ["curl"]


def test_zsh_plugins_clone_missing_only(make_ctx, runner, home):
    plugins = home / ".oh-my-zsh" / "custom" / "plugins"
    (plugins / "zsh-autosuggestions").mkdir(parents=True)
    assert ZshPluginsStep().run(make_ctx()) == 0
    assert runner.argvs == [
        [
            "git",
            "clone",
            "https://github.com/zsh-users/zsh-syntax-highlighting.git",
            str(plugins / "zsh-syntax-highlighting"),
        ]
    ]


def test_zsh_plugins_clone_failure(make_ctx):
    run = RecordingRunner(fail_on={"git": 128})
    assert ZshPluginsStep().run(make_ctx(run=run)) == 1
    assert len(run.calls) == 1


def test_user_configs_installs_dotfiles(make_ctx, home, configs_dir):
    assert UserConfigsStep().run(make_ctx()) == 0
    assert (home / ".zshrc").read_bytes() == (configs_dir / ".zshrc").read_bytes()
    assert (home / ".vimrc").read_bytes() == (configs_dir / ".vimrc").read_bytes()


def test_user_configs_asks_before_overwrite(make_ctx, home, configs_dir):
    (home / ".zshrc").write_text("keep\n", encoding="utf-8")
    (home / ".vimrc").write_text("old\n", encoding="utf-8")
    assert UserConfigsStep().run(make_ctx(input_fn=answers("n", "Y"))) == 0
    assert (home / ".zshrc").read_text(encoding="utf-8") == "keep\n"
    assert (home / ".vimrc").read_bytes() == (configs_dir / ".vimrc").read_bytes()


def test_root_config_mirrors_dotfiles(make_ctx, runner, home):
    assert RootConfigStep().run(make_ctx()) == 0
    assert [argv[-1] for argv in runner.argvs] == ["/root/.oh-my-zsh", "/root/.zshrc", "/root/.vimrc"]


def test_zram_copies_generator_config(make_ctx, runner, configs_dir):
    assert ZramSwapStep().run(make_ctx()) == 0
    assert runner.argvs == [["sudo", "cp", str(configs_dir / "zram-generator.conf"), "/etc/systemd/"]]


def test_zram_missing_source(make_ctx, configs_dir):
    (configs_dir / "zram-generator.conf").unlink()
    with pytest.raises(SourceUnreadable):
        ZramSwapStep().run(make_ctx())
