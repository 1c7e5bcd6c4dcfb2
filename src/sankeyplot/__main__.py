"""Run with: python -m sankeyplot [data_file]"""
from sankeyplot.main import main

if __name__ == "__main__":
    main()
