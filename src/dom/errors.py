# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations


class DomError(Exception):
    pass


class InvalidArgumentError(DomError, ValueError):
    argument: str

    def __init__(self, argument: str, reason: str) -> None:
        super().__init__(f"{argument}: {reason}")
        self.argument = argument


class TreeTooDeepError(DomError, RecursionError):
    depth: int
    limit: int

    def __init__(self, depth: int, limit: int) -> None:
        super().__init__(f"Tree depth {depth} exceeds render limit of {limit}")
        self.depth = depth
        self.limit = limit
