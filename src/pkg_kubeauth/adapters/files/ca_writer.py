from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from typing import Optional

from ...domain.constants import CA_FILE_SUFFIX
from ...domain.exceptions import ResourceError
from ...domain.ports import CAFileWriter


class TempCAFileWriter(CAFileWriter):
    """
    Writes CA material to a freshly created, uniquely named temp file.

    Only the path is handed back; the file outlives this call and cleaning
    it up is the process's concern.
    """

    def __init__(self, directory: Optional[str] = None, logger: Optional[logging.Logger] = None) -> None:
        self._directory = directory
        self._logger = logger or logging.getLogger(__name__)

    def write(self, ca_certificate_data: str) -> str:
        try:
            handle = tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                suffix=CA_FILE_SUFFIX,
                dir=self._directory,
                delete=False,
            )
        except OSError as exc:
            raise ResourceError(f"Could not create CA certificate file: {exc}") from exc

        path = handle.name
        try:
            with handle:
                handle.write(ca_certificate_data)
        except OSError as exc:
            with contextlib.suppress(OSError):
                os.unlink(path)
            raise ResourceError(f"Could not write CA certificate to {path}: {exc}") from exc

        self._logger.debug("wrote CA certificate to %s", path)
        return path
