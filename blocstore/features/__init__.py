"""
各 feature 的 Store：counter、auth、dashboard、home、profile、notification、theme。

每個 feature 各自建立獨立的 Store 實例，彼此之間沒有順序保證。
"""
