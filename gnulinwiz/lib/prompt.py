from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Union

from ..errors import InvalidInput

logger = logging.getLogger(__name__)


class Prompter:
    """Line-oriented questions on stdin.

    ``assume_yes`` answers every overwrite question with yes without reading.
    """

    def __init__(self, input_fn: Callable[[str], str] = input, *, assume_yes: bool = False) -> None:
        self._input = input_fn
        self.assume_yes = assume_yes

    def _ask(self, question: str) -> str:
        try:
            return self._input(question)
        except EOFError:
            raise InvalidInput("error reading input: end of input") from None

    def confirm_overwrite(self, path: Union[str, Path]) -> bool:
        if self.assume_yes:
            return True
        answer = self._ask(f"{path} already exists. overwrite? [y/N] ")
        return answer.strip().lower() == "y"

    def choose_custom_packages(self) -> bool:
        answer = self._ask("enter any number for the default list of software or 0 to enter a custom list: ")
        try:
            value = int(answer.strip())
        except ValueError:
            raise InvalidInput(
                "please enter 0 for a custom list or any other number for the default list."
            ) from None

        if value == 0:
            logger.info("you chose to enter a custom list")
            return True
        logger.info("you chose to use the default list")
        return False

    def read_package_list(self) -> List[str]:
        return self._ask("enter the software packages to install (separated by spaces): ").split()
