"""
Configuration for live batch adjustment.

The multiplier tables are empirically chosen policy constants, pending
calibration against real waste and shortage outcomes.
"""

from batch_engine.app.schemas import BatchProgressState

# reduce: first bucket whose upper bound exceeds the rate wins (rate < bound)
REDUCE_BUCKETS = [
    (0.50, 0.68),  # under half served: cut ~32%
    (0.75, 0.82),  # cut ~18%
]
REDUCE_DEFAULT = 0.93  # rate >= 0.75: cut ~7%

# increase: first bucket whose lower bound the rate exceeds wins (rate > bound)
INCREASE_BUCKETS = [
    (0.90, 1.18),  # nearly gone: bump ~18%
    (0.75, 1.12),  # bump ~12%
]
INCREASE_DEFAULT = 1.08  # rate <= 0.75: bump ~8%

# Consumed share assumed when the operator reports progress without a count
CONSUMED_SHARE_BEFORE_BATCH1_DONE = 0.3
CONSUMED_SHARE_OF_CURRENT_BATCH = 0.7

# Displayed consumption estimate per progress state
ESTIMATED_CONSUMPTION_PERCENT = {
    BatchProgressState.NOT_STARTED: 30,
    BatchProgressState.BATCH1_COMPLETE: 60,
    BatchProgressState.BATCH2_STARTED: 60,
    BatchProgressState.BATCH2_COMPLETE: 85,
    BatchProgressState.BATCH3_STARTED: 85,
    BatchProgressState.DONE: 85,
}

# Next-action advice thresholds (percent consumed)
WAIT_BELOW_PERCENT = 50
WAIT_MINUTES = 15
BATCH3_GO_PERCENT = 85
