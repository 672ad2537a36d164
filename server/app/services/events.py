"""WebSocket event names used on the wire.

Pure data module, safe to import from anywhere.
"""

# Client -> Server
JOIN_ROOM = "join-room"
CODE_CHANGE = "code-change"
CHECK_SOLUTION = "check-solution"

# Server -> Client
CONNECTED = "connected"
ROOM_INFO = "room-info"
CODE_UPDATE = "code-update"
MENTOR_LEFT = "mentor-left"
SOLUTION_CORRECT = "solution-correct"
ERROR = "error"
