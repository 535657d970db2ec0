"""
Configuration for Maze Solver
=============================
"""

# Maze Configuration
MAZE_CONFIG = {
    "rows": 13,                    # 400px canvas / 30px cells
    "columns": 13,
}

# DQN Hyperparameters
AGENT_CONFIG = {
    "n_actions": 4,                # Actions: 0=UP, 1=RIGHT, 2=DOWN, 3=LEFT
    "hidden_size": 64,             # Units in each of the two hidden layers
    "learning_rate": 0.005,        # Adam learning rate
    "discount_factor": 0.95,       # Gamma: discount factor
    "batch_size": 16,              # Replay buffer sample size
    "replay_size": 1000,           # Replay buffer capacity (FIFO)
    "target_update_steps": 5,      # Training steps between target network syncs
}

# Training Configuration
TRAIN_CONFIG = {
    "n_episodes": 100,             # Episode budget
    "max_steps": 100,              # Step budget per episode
    "eps_start": 0.3,              # Initial exploration rate
    "eps_end": 0.1,                # Exploration floor
    "warm_episodes": 10,           # Early episodes that get extra gradient steps
    "warm_iterations": 3,          # Gradient steps per tick during warm episodes
    "iterations": 1,               # Gradient steps per tick afterwards
    "stall_threshold": 5,          # Repeated positions before a forced move
    "log_interval": 10,            # Print stats every N episodes
}

# Playback Configuration
PLAY_CONFIG = {
    "max_steps": 100,              # Step budget for a replay
    "stall_threshold": 3,          # Repeated positions before a forced move
    "log_interval": 1,             # Print position and score every N steps
}
