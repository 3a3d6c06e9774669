"""HormonaFlow: cycle-aware check-in tracking."""
