"""Pattern graphs and star characteristics."""