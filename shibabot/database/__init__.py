"""Storage interface with MySQL and MongoDB back ends."""