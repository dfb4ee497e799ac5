# Test data and mock factories
