"""Domain services: text front end, std specializations and C emitters."""
