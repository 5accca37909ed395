"""Error taxonomy for sheet and inventory synchronization."""


class SheetkeeperError(Exception):
    """Base class for all Sheetkeeper errors."""

    pass


class Unreachable(SheetkeeperError):
    """The authority could not be contacted."""

    pass


class Rejected(SheetkeeperError):
    """The authority was reached but declined the write."""

    pass


class UnknownItem(SheetkeeperError):
    """An inventory request referenced an item id missing from the catalog."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"Unknown item id: {item_id}")
        self.item_id = item_id


class StaleResponse(SheetkeeperError):
    """A response arrived for a request that a newer one has superseded."""

    def __init__(self, tag: int, applied_tag: int) -> None:
        super().__init__(f"Response for request {tag} superseded by request {applied_tag}")
        self.tag = tag
        self.applied_tag = applied_tag
