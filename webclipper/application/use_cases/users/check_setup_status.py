# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from webclipper.application.dto import SetupStatus
from webclipper.domain import StorageError
from webclipper.domain.users.repositories import UserRepository
from webclipper.shared.result import Ok, Result, catch_errors


class CheckSetupStatusUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    @catch_errors(StorageError)
    def execute(self) -> Result[SetupStatus]:
        return Ok(SetupStatus(needs_setup=self._users.count() == 0))
