"""Domain types shared by the API and the backend adapter."""
