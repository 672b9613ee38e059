from .step_10_firewall_file import FirewallFileStep
from .step_15_firewall_apply import FirewallApplyStep
from .step_20_software_install import SoftwareInstallStep
from .step_30_default_shell import DefaultShellStep
from .step_40_oh_my_zsh import OhMyZshStep
from .step_45_zsh_plugins import ZshPluginsStep
from .step_50_user_configs import UserConfigsStep
from .step_60_root_config import RootConfigStep
from .step_70_zram_swap import ZramSwapStep

__all__ = [
    "FirewallFileStep",
    "FirewallApplyStep",
    "SoftwareInstallStep",
    "DefaultShellStep",
    "OhMyZshStep",
    "ZshPluginsStep",
    "UserConfigsStep",
    "RootConfigStep",
    "ZramSwapStep",
]
