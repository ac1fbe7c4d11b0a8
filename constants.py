# lane_beat/constants.py

# ============================================================================
# 게임 해상도 및 화면 설정
# ============================================================================

SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
SCREEN_TITLE = "Lane Beat"
FRAME_RATE = 60

# ============================================================================
# 로깅
# ============================================================================

LOG_LEVEL = "INFO"
LOG_FORMAT = "[%(levelname)s] %(message)s"

# ============================================================================
# 판정선 및 노트 이동 설정 (필드 높이 대비 퍼센트)
# ============================================================================

HIT_LINE_Y = 85.0  # 판정선 위치 (화면 위에서부터 %)
HIT_WINDOW = 15.0  # +/- 판정 허용 범위 (%)
SPAWN_Y = -10.0  # 노트가 생성되는 위치 (화면 위쪽 바깥)
CLEANUP_Y = 120.0  # 꼬리가 이 위치를 넘으면 노트 제거

NOTE_RADIUS = 25  # 노트 원 반지름 (px)

# ============================================================================
# 점수 및 체력
# ============================================================================

SCORE_HIT = 10
SCORE_MISS = -5
SCORE_HOLD_BONUS = 5
MAX_HEALTH = 100.0
HEALTH_PENALTY = 10.0
HEALTH_GAIN = 2.0

# ============================================================================
# 기본 난이도 (config/difficulty.json 이 없을 때 사용)
# ============================================================================

DEFAULT_DIFFICULTY = "MEDIUM"
DEFAULT_SPAWN_INTERVAL_MS = 400
DEFAULT_FALL_SPEED = 0.6  # 틱당 이동 (%)
DEFAULT_CHORD_PROBABILITY = 0.15
DEFAULT_HOLD_PROBABILITY = 0.2
DEFAULT_HOLD_LENGTH_RANGE = (15.0, 35.0)

# ============================================================================
# 레인 (4키 기본 배치)
# ============================================================================

DEFAULT_LANES = [
    {"color": "green", "key": "a", "label": "A", "x_percent": 20},
    {"color": "red", "key": "s", "label": "S", "x_percent": 40},
    {"color": "yellow", "key": "j", "label": "J", "x_percent": 60},
    {"color": "blue", "key": "k", "label": "K", "x_percent": 80},
]

# ============================================================================
# 피드백 텍스트
# ============================================================================

FEEDBACK_PERFECT = "PERFECT"
FEEDBACK_MISS = "MISS"
FEEDBACK_HOLD = "HOLD"
FEEDBACK_FADE_STEP = 0.05
FEEDBACK_DRIFT_STEP = 0.15

# ============================================================================
# 색상 정의 (RGB)
# ============================================================================

COLOR_RED = (239, 68, 68)
COLOR_GREEN = (34, 197, 94)
COLOR_WHITE = (255, 255, 255)
COLOR_YELLOW = (250, 204, 21)
COLOR_BLUE = (59, 130, 246)
COLOR_GRAY = (102, 102, 102)
COLOR_BACKGROUND = (17, 24, 39)

LANE_COLORS = {
    "green": COLOR_GREEN,
    "red": COLOR_RED,
    "yellow": COLOR_YELLOW,
    "blue": COLOR_BLUE,
}
