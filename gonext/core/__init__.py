# Core infrastructure: storage, errors, validation, logging
