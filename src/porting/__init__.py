"""Number porting: portability checks, port-in submission and status tracking."""
