# Core: configuration, logging, exceptions
