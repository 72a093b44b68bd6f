# --- Display ---
WIDTH = 800
HEIGHT = 400
FPS = 60
MAX_TICK_HZ = 120           # never advance more than this many ticks per second

# --- World / Physics (units per tick) ---
GROUND_Y = 350              # y of the ground separator line
GRAVITY = 0.8
JUMP_POWER = 16.0
BASE_SPEED = 8.0            # scroll speed at score 0 (px/tick)
SPEED_STEP = 0.15           # +15% per SCORE_PER_LEVEL points
SCORE_PER_LEVEL = 100
MAX_SPEED_MULT = 3.0
SCORE_PER_TICK = 0.2

# --- Dino ---
DINO_X = 80                 # dino's fixed x (world scrolls left)
DINO_GROUND_Y = 300         # top of the standing sprite when on the ground
DINO_W = 50
DINO_H = 45
DINO_DUCK_H = 30
DINO_DUCK_Y = 320           # top of the crouched sprite (feet stay on the ground)
HITBOX_INSET_X = 8
HITBOX_INSET_Y = 5

# --- Obstacles ---
SPAWN_FREQ_BASE = 150       # ticks between spawns at speed 0
SPAWN_FREQ_PER_SPEED = 3
SPAWN_FREQ_MIN = 60
OBSTACLE_INSET = 2
CACTUS_Y = 310
CACTUS_W = 20
CACTUS_H = 40
BIRD_W = 35
BIRD_H = 25
BIRD_HEIGHTS = (250, 200)
BIRD_MOVE_SCORE = 200       # birds spawned from this score on bob up and down
BIRD_MOVE_STEP = 0.05       # radians per tick
BIRD_MOVE_RANGE = 30.0      # pixels up/down from initial_y

# --- Clouds ---
CLOUD_COUNT_START = 3
CLOUD_MAX = 5
CLOUD_SPAWN_TICKS = 800

# --- Particles ---
PARTICLE_GRAVITY = 0.1
PUFF_COUNT = 5
PUFF_LIFE = 30
EXPLOSION_COUNT = 15
EXPLOSION_LIFE = 60

# --- Persistence ---
HIGH_SCORE_KEY = "dinoHighScore"
SCORES_PATH_DEFAULT = "~/.dinorun/scores.json"
SCORES_PATH_ENV = "DINORUN_SCORES"
SEED_DEFAULT = None         # None -> fresh random layout each launch

# --- Colors (RGB) ---
COLOR_SKY_TOP = (226, 232, 240)
COLOR_SKY_BOTTOM = (247, 250, 252)
COLOR_CLOUD = (203, 213, 224, 153)
COLOR_GROUND_DASH = (226, 232, 240)
COLOR_GROUND_LINE = (203, 213, 224)
COLOR_DINO = (45, 80, 22)
COLOR_DINO_BODY = (74, 124, 32)
COLOR_DINO_SPOT = (26, 61, 10)
COLOR_DINO_EYE = (0, 0, 0)
COLOR_DINO_CLAW = (139, 69, 19)
COLOR_WHITE = (255, 255, 255)
COLOR_BLACK = (0, 0, 0)
COLOR_CACTUS = (56, 161, 105)
COLOR_CACTUS_SPIKE = (47, 133, 90)
COLOR_BIRD = (74, 85, 104)
COLOR_BEAK = (246, 173, 85)
COLOR_PARTICLE = (74, 85, 104)
COLOR_EXPLOSION = (239, 68, 68)
COLOR_HUD = (74, 85, 104)
COLOR_HUD_DIM = (160, 174, 192)
