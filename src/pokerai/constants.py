NUM_CARDS = 52
HOLE_CARDS = 2
COMMUNITY_CARDS = 5
HAND_SIZE = HOLE_CARDS + COMMUNITY_CARDS

# Opponent hands are drawn from one deck, so the table size has to stay bounded.
MAX_OPPONENTS = 9

# Simulations between two deadline checks in a worker.
DEFAULT_CHECK_EVERY = 1000
