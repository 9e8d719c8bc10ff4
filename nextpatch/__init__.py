"""Comment out Next.js's tsconfig.json rewrite and record it as a package patch."""
