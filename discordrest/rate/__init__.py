"""Rate-limit buckets, bucket keys and emoji recognition for request paths."""