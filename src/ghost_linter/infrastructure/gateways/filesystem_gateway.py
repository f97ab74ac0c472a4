"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from pathlib import Path

from ghost_linter.domain.constants import GO_SOURCE_SUFFIX, GO_TEST_SUFFIX
from ghost_linter.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    @staticmethod
    def is_go_file(path: str) -> bool:
        return path.endswith(GO_SOURCE_SUFFIX)

    @staticmethod
    def is_test_file(path: str) -> bool:
        return path.endswith(GO_TEST_SUFFIX)

    def select_go_files(self, paths: list[str], ignore_tests: bool = False) -> list[str]:
        """
        Return the Go files to check, preserving argument order.

        Directories expand to their ``.go`` files recursively, sorted. Other
        paths are kept only when they carry the ``.go`` suffix; they are
        passed through as given so reports use the caller's spelling.
        """
        selected: list[str] = []
        for path in paths:
            path_obj = Path(path)
            if path_obj.is_dir():
                candidates = sorted(str(p) for p in path_obj.glob(f"**/*{GO_SOURCE_SUFFIX}") if p.is_file())
            else:
                candidates = [path]
            for candidate in candidates:
                if not self.is_go_file(candidate):
                    continue
                if ignore_tests and self.is_test_file(candidate):
                    continue
                selected.append(candidate)
        return selected

    def read_bytes(self, path: str) -> bytes:
        """Read a file's raw contents."""
        return Path(path).read_bytes()
