"""pageprobe: single-page SEO/GEO and load performance analyzer."""
