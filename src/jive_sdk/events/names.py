# Event names shared with the Jive platform.
# Created: 2026-02-12

from enum import Enum


class GlobalEvents(str, Enum):
    """System lifecycle events emitted by the SDK."""

    NEW_INSTANCE = "newInstance"
    INSTANCE_UPDATED = "instanceUpdated"
    INSTANCE_REMOVED = "instanceRemoved"
    DATA_PUSHED = "dataPushed"
    ACTIVITY_PUSHED = "activityPushed"
    COMMENT_PUSHED = "commentPushed"
    CLIENT_APP_REGISTRATION_SUCCESS = "registeredJiveInstanceSuccess"
    CLIENT_APP_REGISTRATION_FAILED = "registeredJiveInstanceFailed"


class TileEvents(str, Enum):
    """Operations a tile (or the framework) can request through the event table."""

    PUSH_DATA_TO_JIVE = "pushDataToJive"
    PUSH_ACTIVITY_TO_JIVE = "pushActivityToJive"
    PUSH_COMMENT_TO_JIVE = "pushCommentToJive"
    COMMENT_ON_ACTIVITY = "commentOnActivity"
    COMMENT_ON_ACTIVITY_BY_EXTERNAL_ID = "commentOnActivityByExternalID"
    FETCH_COMMENTS_ON_ACTIVITY = "fetchCommentsOnActivity"
    FETCH_ALL_COMMENTS_FOR_EXT_STREAM = "fetchAllCommentsForExtstream"
    INSTANCE_REGISTRATION = "registration"
    INSTANCE_UNREGISTRATION = "unregistration"
    CLIENT_APP_REGISTRATION = "clientAppRegistration"
    GET_PAGINATED_RESULTS = "getPaginatedResults"
    GET_EXTERNAL_PROPS = "getExternalProps"
    SET_EXTERNAL_PROPS = "setExternalProps"
    DELETE_EXTERNAL_PROPS = "deleteExternalProps"


# Events that push worker nodes are allowed to handle
PUSH_QUEUE_EVENTS = (
    TileEvents.PUSH_DATA_TO_JIVE.value,
    TileEvents.PUSH_ACTIVITY_TO_JIVE.value,
    TileEvents.PUSH_COMMENT_TO_JIVE.value,
)

GLOBAL_EVENTS = tuple(e.value for e in GlobalEvents)
