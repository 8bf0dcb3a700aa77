"""Services around the engine: accounts, saved sheets and file transfer."""
