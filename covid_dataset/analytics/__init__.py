"""Row projections (timelines, population histories) and aggregate totals."""
