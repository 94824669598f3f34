"""
Recoverable conversion problems.

Fatal problems are exceptions (see ``core.exceptions``). Everything a run can
survive is recorded here instead, so callers can inspect what was skipped or
left unset without scraping log files.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional

from health_export.logging import get_logger

log = get_logger(__name__)


class IssueKind(str, Enum):
    UNKNOWN_EXTENSION = "UnknownExtension"
    MISSING_REQUIRED_ATTRIBUTE = "MissingRequiredAttribute"


@dataclass(frozen=True)
class Issue:
    kind: IssueKind
    element: str
    message: str
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass
class IssueLog:
    """
    Structured channel for recoverable problems, one per conversion run.

    Every report is counted per kind; only the first ``sample_limit`` issues of
    each kind are kept (and logged as warnings), later ones are logged at debug.
    """

    sample_limit: int = 100
    issues: List[Issue] = field(default_factory=list)
    _counts: Counter = field(default_factory=Counter, init=False, repr=False)

    def report(
        self,
        kind: IssueKind,
        element: str,
        message: str,
        attributes: Optional[Mapping[str, str]] = None,
    ) -> Issue:
        issue = Issue(kind=kind, element=element, message=message, attributes=dict(attributes or {}))
        self._counts[kind.value] += 1
        if self._counts[kind.value] <= self.sample_limit:
            self.issues.append(issue)
            log.warning("%s on <%s>: %s %s", kind.value, element, message, issue.attributes or "")
        else:
            log.debug("%s on <%s>: %s", kind.value, element, message)
        return issue

    def unknown_extension(self, parent: str, element: str, attributes: Mapping[str, str]) -> Issue:
        return self.report(
            IssueKind.UNKNOWN_EXTENSION,
            element,
            f"unknown child of {parent}, skipping element and its subtree",
            attributes,
        )

    def missing_attribute(self, element: str, attribute: str, attributes: Mapping[str, str]) -> Issue:
        return self.report(
            IssueKind.MISSING_REQUIRED_ATTRIBUTE,
            element,
            f"required '{attribute}' not present or not parseable",
            attributes,
        )

    def counts(self) -> Dict[str, int]:
        return dict(self._counts)

    def of_kind(self, kind: IssueKind) -> List[Issue]:
        return [issue for issue in self.issues if issue.kind is kind]

    def __len__(self) -> int:
        return sum(self._counts.values())
