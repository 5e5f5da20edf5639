"""Mini Racer game logic and arcade front end."""
