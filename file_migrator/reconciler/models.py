from dataclasses import dataclass, field

STATUS_STORED = "stored"
STATUS_FETCH_FAILED = "fetch_failed"
STATUS_STORE_FAILED = "store_failed"
STATUS_AUDIT_FAILED = "audit_failed"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class FileOutcome:
    """Result of reconciling one fetch job."""

    submission_id: str
    field_id: str
    origin_locator: str
    status: str
    storage_key: str = ""
    error: str = ""
    audit_skipped: bool = False
    profile_failed: bool = False


@dataclass
class RunReport:
    """Accumulates per-file outcomes across the batch."""

    submissions: int = 0
    outcomes: list[FileOutcome] = field(default_factory=list)

    def add(self, outcome: FileOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def stored(self) -> int:
        return sum(1 for o in self.outcomes if o.status in (STATUS_STORED, STATUS_AUDIT_FAILED))

    @property
    def audited(self) -> int:
        return sum(
            1 for o in self.outcomes if o.status == STATUS_STORED and not o.audit_skipped
        )

    @property
    def failed(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.status != STATUS_STORED]

    def summary(self) -> str:
        return (
            f"{self.submissions} submissions, {len(self.outcomes)} files: "
            f"{self.stored} stored, {self.audited} audited, {len(self.failed)} with errors"
        )
