"""Field names and tags of the Kai service JSON protocol."""

# Envelope fields
TYPE = "type"
SUCCESS = "success"
ERROR_CODE = "errorCode"
ERROR = "error"
MESSAGE = "message"
AUTHENTICATED = "authenticated"
MODULE_ID = "moduleId"
MODULE_SECRET = "moduleSecret"
FOREGROUND_PROCESS = "foregroundProcess"
KAI_ID = "kaiId"
HAND = "hand"
DEFAULT_KAI = "defaultKai"
DEFAULT_LEFT_KAI = "defaultLeftKai"
DEFAULT_RIGHT_KAI = "defaultRightKai"
DATA = "data"
KAIS = "kais"

# Envelope tags
AUTHENTICATION = "authentication"
INCOMING_DATA = "incomingData"
CONNECTED_KAIS = "connectedKais"
SET_CAPABILITIES = "setCapabilities"

# Fragment tags, also used as setCapabilities field names
GESTURE_DATA = "gestureData"
LINEAR_FLICK_DATA = "linearFlickData"
FINGER_SHORTCUT_DATA = "fingerShortcutData"
FINGER_POSITIONAL_DATA = "fingerPositionalData"
PYR_DATA = "pyrData"
QUATERNION_DATA = "quaternionData"
ACCELEROMETER_DATA = "accelerometerData"
GYROSCOPE_DATA = "gyroscopeData"
MAGNETOMETER_DATA = "magnetometerData"

# Fragment fields
GESTURE = "gesture"
FLICK = "flick"
FINGERS = "fingers"
PITCH = "pitch"
YAW = "yaw"
ROLL = "roll"
QUATERNION = "quaternion"
ACCELEROMETER = "accelerometer"
GYROSCOPE = "gyroscope"
MAGNETOMETER = "magnetometer"
W = "w"
X = "x"
Y = "y"
Z = "z"

FINGER_COUNT = 4
