import enum


class Modality(str, enum.Enum):
    IN_PERSON = "IN_PERSON"
    ONLINE_SYNC = "ONLINE_SYNC"
    ONLINE_ASYNC = "ONLINE_ASYNC"
    HYBRID = "HYBRID"
    UNKNOWN = "UNKNOWN"


class SectionStatus(str, enum.Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    WAITLIST = "WAITLIST"
    UNKNOWN = "UNKNOWN"
