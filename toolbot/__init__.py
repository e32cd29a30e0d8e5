"""Discord bot that provisions private threads of curated tool links."""
