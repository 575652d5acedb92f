"""Classification of clamscan output into scan verdicts."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .errors import ParseError, ToolExecutionError
from .models import ProcessOutput, ScanVerdict, Verdict

logger = logging.getLogger(__name__)

# libclamav prints these for e.g. outdated signatures; they say nothing
# about whether the scan itself worked.
DEFAULT_BENIGN_PREFIXES = ("LibClamAV Warning:",)
SUCCESS_MARKER = "OK"


class OutputClassifier:
    """Turns a two-stream process capture into a ScanVerdict.

    stderr is checked first: once benign warning lines are dropped, any text
    left over means the tool failed, whatever stdout says. Otherwise the last
    stdout line ``<subject>: <result>`` decides the verdict, clean only when
    the result is exactly the success marker.
    """

    def __init__(
        self,
        benign_prefixes: Iterable[str] = DEFAULT_BENIGN_PREFIXES,
        success_marker: str = SUCCESS_MARKER,
    ):
        self.benign_prefixes = tuple(benign_prefixes)
        self.success_marker = success_marker

    def is_benign(self, line: str) -> bool:
        stripped = line.strip()
        return any(stripped.startswith(prefix) for prefix in self.benign_prefixes)

    def significant_stderr(self, stderr: str) -> List[str]:
        """stderr lines left after dropping blanks and benign warnings."""
        significant: List[str] = []
        for line in stderr.splitlines():
            if not line.strip():
                continue
            if self.is_benign(line):
                logger.debug(f"Ignoring benign scanner warning: {line.strip()}")
                continue
            significant.append(line)
        return significant

    def summary_line(
        self, stdout: str, path: Optional[Union[str, Path]] = None
    ) -> str:
        lines = [line for line in stdout.splitlines() if line.strip()]
        if not lines:
            raise ParseError("Scanner produced no output", stdout=stdout, path=path)
        return lines[-1]

    def classify(
        self,
        output: ProcessOutput,
        path: Union[str, Path],
        tool_name: Optional[str] = None,
    ) -> ScanVerdict:
        errors = self.significant_stderr(output.stderr)
        if errors:
            text = "\n".join(errors)
            raise ToolExecutionError(
                f"Scanner reported an error: {errors[0].strip()}",
                stderr=text,
                path=path,
            )

        line = self.summary_line(output.stdout, path)

        _subject, sep, result = line.partition(":")
        if not sep:
            raise ParseError(
                f"Summary line has no ':' separator: {line!r}",
                stdout=output.stdout,
                path=path,
            )

        token = result.strip()
        if token == self.success_marker:
            return ScanVerdict(
                verdict=Verdict.CLEAN,
                path=Path(path),
                tool_name=tool_name,
                output=output,
            )

        return ScanVerdict(
            verdict=Verdict.INFECTED,
            path=Path(path),
            signature=self.signature_from(token),
            tool_name=tool_name,
            output=output,
        )

    @staticmethod
    def signature_from(token: str) -> Optional[str]:
        """Signature name from a result token such as 'Eicar-Test-Signature FOUND'."""
        if token.endswith("FOUND"):
            token = token[: -len("FOUND")].strip()
        return token or None
