"""Domain rules - чистые функции без I/O."""
