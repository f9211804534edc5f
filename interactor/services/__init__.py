# Services module - TeamCity, build server and reporting integrations
