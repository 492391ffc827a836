"""10DLC compliance: brand and campaign registration and status reconciliation."""
