"""City Weather: look up a city and render its weather, forecast and air quality."""
