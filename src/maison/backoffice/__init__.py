"""Back-office console for editors, merchandisers and administrators."""
