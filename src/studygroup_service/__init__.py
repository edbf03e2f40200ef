"""Study group service: account settings (profile, tags, password)."""
